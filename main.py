import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from config import Config
from database import init_db
from middleware import SecurityHeadersMiddleware, BodySizeLimitMiddleware
from rate_limit import SlidingWindowRateLimiter, RateLimitMiddleware
from routes.auth import router as auth_router
from routes.posts import router as posts_router
from routes.users import router as users_router
from routes.admin import router as admin_router
from routes.moderation import router as moderation_router
from routes.reports import router as reports_router
from routes.health import router as health_router

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Social Platform API")

rate_limiter = SlidingWindowRateLimiter(Config.RATE_LIMIT_MAX, Config.RATE_LIMIT_WINDOW_SECONDS)

# Last added runs first
app.add_middleware(BodySizeLimitMiddleware, max_bytes=Config.MAX_BODY_BYTES)
app.add_middleware(RateLimitMiddleware, limiter=rate_limiter, trust_proxy=Config.TRUST_PROXY)
app.add_middleware(SecurityHeadersMiddleware, enable_hsts=Config.ENABLE_HSTS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],  # Allows all methods
    allow_headers=["*"],  # Allows all headers
)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"].removeprefix("Value error, "),
        }
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Validation failed", "errors": errors})

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

# Initialize database
init_db()

# Include routers
app.include_router(auth_router, prefix="/api")
app.include_router(posts_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(moderation_router, prefix="/api")
app.include_router(reports_router, prefix="/api")
app.include_router(health_router, prefix="/api")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=Config.PORT, reload=True)
