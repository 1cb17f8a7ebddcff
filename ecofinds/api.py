# ecofinds/api.py

from fastapi import APIRouter

from .auth.controller import router as auth_router
from .products.controller import router as products_router
from .cart.controller import router as cart_router
from .orders.controller import router as orders_router
from .users.controller import router as users_router

# Everything is mounted under /api by main.py
api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(products_router)
api_router.include_router(cart_router)
api_router.include_router(orders_router)
api_router.include_router(users_router)
