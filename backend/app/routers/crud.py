"""
通用 CRUD 路由工厂
适用于没有额外领域行为的资源；授权与行过滤由 ResourceService 完成
"""
from typing import List, Type
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from core.security.context import SecurityContext
from app.database import get_db
from app.security.auth import get_security_context
from app.services.resource_service import ResourceService


def build_crud_router(
    kind: str,
    prefix: str,
    tag: str,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    response_schema: Type[BaseModel],
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("/", response_model=List[response_schema])
    def list_records(
        skip: int = Query(0, ge=0),
        limit: int = Query(100, ge=1, le=500),
        db: Session = Depends(get_db),
        context: SecurityContext = Depends(get_security_context)
    ):
        return ResourceService(db, context, kind).list(skip=skip, limit=limit)

    @router.get("/{record_id}", response_model=response_schema)
    def get_record(
        record_id: int,
        db: Session = Depends(get_db),
        context: SecurityContext = Depends(get_security_context)
    ):
        return ResourceService(db, context, kind).get(record_id)

    @router.post("/", response_model=response_schema)
    def create_record(
        data: create_schema,
        db: Session = Depends(get_db),
        context: SecurityContext = Depends(get_security_context)
    ):
        return ResourceService(db, context, kind).create(data.model_dump())

    @router.put("/{record_id}", response_model=response_schema)
    def update_record(
        record_id: int,
        data: update_schema,
        db: Session = Depends(get_db),
        context: SecurityContext = Depends(get_security_context)
    ):
        return ResourceService(db, context, kind).update(record_id, data.model_dump(exclude_unset=True))

    @router.delete("/{record_id}")
    def delete_record(
        record_id: int,
        db: Session = Depends(get_db),
        context: SecurityContext = Depends(get_security_context)
    ):
        ResourceService(db, context, kind).delete(record_id)
        return {"message": f"{kind} {record_id} deleted"}

    return router
