from fastapi import Request

from askqa.services.query_service import QueryService


def get_query_service(request: Request) -> QueryService:
    """Wire a QueryService from the collaborators held on app.state."""
    state = request.app.state
    return QueryService(state.settings, state.llm_provider, state.database)
