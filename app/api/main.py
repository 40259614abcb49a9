from fastapi import APIRouter

from app.api.routes import chat, documents, health, hotels, tariffs

api_router = APIRouter()

api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(documents.router, prefix="/documents", tags=["Documents"])
api_router.include_router(tariffs.router, prefix="/tariffs", tags=["Tariffs"])
api_router.include_router(hotels.router, prefix="/hotels", tags=["Hotels"])
api_router.include_router(chat.router, prefix="/chat", tags=["Chat"])
