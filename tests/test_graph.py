"""Flow graph construction and cycle detection."""

from survey_flow.graph import END_NODE, build_flow_graph, find_cycles

from helpers.factories import branch, cond, q, rule


def _edges(graph):
    return {(e["data"]["source"], e["data"]["target"], e["data"]["kind"]) for e in graph["edges"]}


class TestBuildFlowGraph:

    def test_linear(self):
        graph = build_flow_graph([q("q1"), q("q2")])
        ids = [n["data"]["id"] for n in graph["nodes"]]
        assert ids == ["q1", "q2", END_NODE]
        assert _edges(graph) == {("q1", "q2", "next"), ("q2", END_NODE, "next")}

    def test_node_carries_type_and_title(self):
        graph = build_flow_graph([q("q1", "RATING", title="Rate us")])
        assert graph["nodes"][0]["data"] == {"id": "q1", "label": "Rate us", "type": "RATING"}

    def test_jump_and_end_edges(self):
        questions = [
            q("q1", branch_logic=branch(
                rule(cond("q1", "equals", "a"), jump="q3"),
                rule(cond("q1", "equals", "b")),
            )),
            q("q2"),
            q("q3"),
        ]
        edges = _edges(build_flow_graph(questions))
        assert ("q1", "q3", "jump") in edges
        assert ("q1", END_NODE, "end") in edges
        assert ("q1", "q2", "next") in edges

    def test_default_end_drops_next_edge(self):
        questions = [
            q("q1", branch_logic=branch(rule(cond("q1", "equals", "a"), jump="q3"), default="end")),
            q("q2"),
            q("q3"),
        ]
        edges = _edges(build_flow_graph(questions))
        assert ("q1", "q2", "next") not in edges
        assert ("q1", END_NODE, "end") in edges

    def test_dangling_target_omitted(self):
        graph = build_flow_graph([q("q1", branch_logic=branch(rule(jump="ghost"))), q("q2")])
        assert all(e["data"]["target"] != "ghost" for e in graph["edges"])

    def test_rule_label(self):
        questions = [q("q1", branch_logic=branch(
            rule(cond("q1", "equals", "a"), cond("q1", "is_not_empty"), jump="q1", logic="any"),
        ))]
        jump = next(e for e in build_flow_graph(questions)["edges"] if e["data"]["kind"] == "jump")
        assert jump["data"]["label"] == "q1 equals a OR q1 is_not_empty"


class TestFindCycles:

    def test_sample_survey_has_no_cycles(self, feedback):
        assert find_cycles(build_flow_graph(feedback.questions)) == []

    def test_backward_jump(self):
        questions = [q("q1"), q("q2"), q("q3", branch_logic=branch(rule(jump="q1")))]
        assert find_cycles(build_flow_graph(questions)) == [["q1", "q2", "q3"]]

    def test_self_loop(self):
        questions = [q("q1", branch_logic=branch(rule(jump="q1")))]
        assert find_cycles(build_flow_graph(questions)) == [["q1"]]
