# backend/gateway/gateway_router.py
from fastapi import APIRouter

# business routers, mounted at the root (no prefix) so paths match the client contract
from routers.users_router import router as auth_router, me_router
from routers.cities_router import router as cities_router
from routers.ai_router import router as ai_router

gateway_router = APIRouter()

# auth / users
gateway_router.include_router(auth_router)    # /auth/register, /auth/login
gateway_router.include_router(me_router)      # /me

# DB-backed resources
gateway_router.include_router(cities_router)  # /cities/...

# AI
gateway_router.include_router(ai_router)      # /ai/insights
