"""API router aggregation."""

from fastapi import APIRouter

from plateshare.api.donations import router as donations_router
from plateshare.api.payments import router as payments_router
from plateshare.api.pickup_requests import router as pickup_requests_router
from plateshare.api.restaurant_requests import router as restaurant_requests_router
from plateshare.api.reviews import router as reviews_router
from plateshare.api.role_requests import router as role_requests_router
from plateshare.api.users import router as users_router

api_router = APIRouter()
api_router.include_router(users_router, tags=["users"])
api_router.include_router(payments_router, tags=["payments"])
api_router.include_router(role_requests_router, tags=["role-requests"])
api_router.include_router(restaurant_requests_router, tags=["restaurant-requests"])
api_router.include_router(donations_router, tags=["donations"])
api_router.include_router(reviews_router, tags=["reviews"])
api_router.include_router(pickup_requests_router, tags=["requests"])
