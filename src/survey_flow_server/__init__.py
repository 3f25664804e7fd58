"""survey_flow_server — FastAPI REST API for the survey-flow SDK.

Exposes the SurveyFlowEngine as a stateless HTTP API: respondent
navigation, question rendering, and authoring-time validation.
"""
