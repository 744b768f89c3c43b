"""
LuxuryStay 酒店后台主应用入口
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.security.checker import AuthorizationDenied
from app.config import settings
from app.database import SessionLocal, init_db
from app.routers import auth, bookings, catalog, maintenance, rooms, ui, users
from app.services.gateway import RecordNotFound, ValidationFailed

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 初始化数据库
    init_db()

    # 注册事件处理器（预订 → 房态同步）
    from app.hotel.services.event_handlers import register_event_handlers, shutdown_event_handlers
    register_event_handlers()

    # 基线数据（各表为空时写入）
    if settings.SEED_ON_STARTUP:
        from app.services.seed_loader import seed_all
        seed_db = SessionLocal()
        try:
            seed_stats = seed_all(seed_db)
            if any(seed_stats.values()):
                logger.info(f"Seed data initialized: {seed_stats}")
        finally:
            seed_db.close()

    yield

    # 关闭房态同步线程池
    shutdown_event_handlers()


# 创建应用
app = FastAPI(
    title=settings.APP_NAME,
    description="酒店后台：员工、客人、房间、预订、服务与工单",
    version="1.0.0",
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AuthorizationDenied)
async def authorization_denied_handler(request: Request, exc: AuthorizationDenied):
    return JSONResponse(
        status_code=403,
        content={
            "detail": str(exc),
            "resource": exc.resource,
            "operation": exc.operation,
        },
    )


@app.exception_handler(ValidationFailed)
async def validation_failed_handler(request: Request, exc: ValidationFailed):
    status_code = 404 if isinstance(exc, RecordNotFound) else 400
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


# 注册路由
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(rooms.router)
app.include_router(bookings.router)
app.include_router(maintenance.router)
for router in catalog.routers:
    app.include_router(router)
app.include_router(ui.router)


@app.get("/")
def root():
    """根路径"""
    return {
        "name": settings.APP_NAME,
        "version": "1.0.0",
    }


@app.get("/health")
def health_check():
    """健康检查"""
    return {"status": "healthy"}
