"""Flow graph of a survey: sequential ``next`` edges plus branch edges.

The question list alone is a line; branch ``jump`` actions turn it into a
directed graph.  :func:`build_flow_graph` produces a node/edge structure
(cytoscape-style ``{"data": {...}}`` entries) for authoring tools, and
:func:`find_cycles` reports loops that a respondent could get stuck in.

The graph ignores skip logic, so it over-approximates the paths any single
respondent can take.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from survey_flow.models.action import JumpAction
from survey_flow.models.question import Question

END_NODE = "__end__"


def _describe(rule) -> str:
    joiner = " AND " if rule.logic == "all" else " OR "
    parts = [f"{c.question_id} {c.operator} {c.value}".strip() for c in rule.conditions]
    return joiner.join(parts) or "always"


def build_flow_graph(questions: Sequence[Question]) -> Dict[str, Any]:
    nodes: List[Dict[str, Any]] = []
    edges: List[Dict[str, Any]] = []
    ids = {q.id for q in questions}

    for q in questions:
        nodes.append({"data": {"id": q.id, "label": q.title, "type": q.type.value}})

    for i, q in enumerate(questions):
        following = questions[i + 1].id if i + 1 < len(questions) else END_NODE
        branch = q.branch_logic
        falls_through = True

        if branch is not None and branch.enabled and branch.rules:
            for rule in branch.rules:
                label = _describe(rule)
                if isinstance(rule.action, JumpAction):
                    target = rule.action.target_question_id
                    # Dangling targets fall through at runtime; the validator reports them
                    if target in ids:
                        edges.append({"data": {"source": q.id, "target": target, "label": label, "kind": "jump"}})
                else:
                    edges.append({"data": {"source": q.id, "target": END_NODE, "label": label, "kind": "end"}})
            if branch.default_action == "end":
                edges.append({"data": {"source": q.id, "target": END_NODE, "label": "default", "kind": "end"}})
                falls_through = False

        if falls_through:
            edges.append({"data": {"source": q.id, "target": following, "label": "next", "kind": "next"}})

    nodes.append({"data": {"id": END_NODE, "label": "Submit", "type": "end"}})
    return {"nodes": nodes, "edges": edges}


def find_cycles(graph: Dict[str, Any]) -> List[List[str]]:
    """Return each cycle found by depth-first search as a list of node ids.

    A cycle is reported once per back edge, starting at the node the back
    edge returns to.
    """
    adjacency: Dict[str, List[str]] = {}
    for node in graph["nodes"]:
        adjacency[node["data"]["id"]] = []
    for edge in graph["edges"]:
        data = edge["data"]
        adjacency.setdefault(data["source"], []).append(data["target"])

    cycles: List[List[str]] = []
    visited: set = set()

    for start in adjacency:
        if start in visited:
            continue
        # Iterative DFS; ``path`` mirrors the recursion stack
        path: List[str] = [start]
        on_path = {start}
        stack = [iter(adjacency[start])]
        visited.add(start)
        while stack:
            nxt = next(stack[-1], None)
            if nxt is None:
                stack.pop()
                on_path.discard(path.pop())
                continue
            if nxt in on_path:
                cycle = path[path.index(nxt):]
                if cycle not in cycles:
                    cycles.append(cycle)
            elif nxt not in visited:
                visited.add(nxt)
                path.append(nxt)
                on_path.add(nxt)
                stack.append(iter(adjacency.get(nxt, [])))

    return cycles
