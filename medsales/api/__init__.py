from fastapi import APIRouter

from medsales.api import auth, post, product, setting, upload

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(product.router)
api_router.include_router(post.router)
api_router.include_router(setting.router)
api_router.include_router(upload.router)
