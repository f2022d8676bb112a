"""
Chatbot Endpoint.

Talk to the cosmic assistant. The assistant always answers: when no AI
provider is configured or the provider fails, a canned reply is returned.
"""

from fastapi import APIRouter

from glimmer.core.models.io import ChatbotRequest, ChatbotResponse
from glimmer.server.services.deps import AssistantDep, CurrentUserDep

router = APIRouter()


@router.post(
    "",
    response_model=ChatbotResponse,
    summary="Ask the Assistant",
    description="Send a message to the cosmic assistant and receive its reply.",
    response_description="The assistant's reply.",
)
async def ask_chatbot(data: ChatbotRequest, _: CurrentUserDep, assistant: AssistantDep) -> ChatbotResponse:
    return ChatbotResponse(response=await assistant.chatbot_reply(data.message, data.context))
