from fastapi import APIRouter

from modboard.api.v1.endpoints import messages, roles, tickets, users

api_router = APIRouter()
api_router.include_router(messages.router)
api_router.include_router(tickets.router)
api_router.include_router(roles.router)
api_router.include_router(users.router)
