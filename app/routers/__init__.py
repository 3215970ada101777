from fastapi import APIRouter

from . import auth, cart, categories


def get_api_router() -> APIRouter:
    router = APIRouter()
    router.include_router(auth.router)
    router.include_router(categories.router)
    router.include_router(cart.router)
    return router
