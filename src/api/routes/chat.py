"""
Chat and Search API Routes.

NOTE: Routes use `def` (not `async def`) because the preference store talks
to Redis through the synchronous client. FastAPI runs sync handlers in a
thread pool, so the event loop is never blocked.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_dialogue_router, get_search_engine
from api.models import ChatRequest, ChatResponse, SearchResponse
from config.settings import Settings, get_settings
from core.logging import bind_context
from dialogue.router import DialogueRouter
from search.engine import SearchEngine

router = APIRouter(prefix="/api", tags=["Chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    summary="Conversational shopping assistant",
)
def chat(
    request: ChatRequest,
    dialogue: DialogueRouter = Depends(get_dialogue_router),
    settings: Settings = Depends(get_settings),
) -> ChatResponse:
    """
    Answer a chat message.

    - Greetings get an introduction
    - "wishlist" / "saved" returns the user's saved products
    - Anything else is interpreted as a product search
    """
    user_id = request.user_id or settings.default_user_id
    bind_context(user_id=user_id)

    reply = dialogue.route(user_id, request.text)
    return ChatResponse.model_validate(reply.to_dict())


@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Filtered product search",
)
def search(
    request: ChatRequest,
    engine: SearchEngine = Depends(get_search_engine),
    settings: Settings = Depends(get_settings),
) -> SearchResponse:
    """Search without dialogue routing: returns products, extracted filters and a follow-up."""
    user_id = request.user_id or settings.default_user_id
    bind_context(user_id=user_id)

    result = engine.search(user_id, request.text)
    return SearchResponse.model_validate(result.to_dict())
