"""
客人、工单与目录类资源路由
"""
from app.models.schemas import (
    GuestCreate, GuestUpdate, GuestResponse,
    HousekeepingCreate, HousekeepingUpdate, HousekeepingResponse,
    ServiceCreate, ServiceUpdate, ServiceResponse,
    ExpenseCreate, ExpenseUpdate, ExpenseResponse,
    ServiceRequestCreate, ServiceRequestUpdate, ServiceRequestResponse,
    FeedbackCreate, FeedbackUpdate, FeedbackResponse,
    SupportRequestCreate, SupportRequestUpdate, SupportRequestResponse,
)
from app.routers.crud import build_crud_router

guests = build_crud_router(
    "Guest", "/guests", "客人管理", GuestCreate, GuestUpdate, GuestResponse)
housekeeping = build_crud_router(
    "Housekeeping", "/housekeeping", "客房清洁", HousekeepingCreate, HousekeepingUpdate, HousekeepingResponse)
services = build_crud_router(
    "Service", "/services", "附加服务", ServiceCreate, ServiceUpdate, ServiceResponse)
expenses = build_crud_router(
    "Expense", "/expenses", "费用", ExpenseCreate, ExpenseUpdate, ExpenseResponse)
service_requests = build_crud_router(
    "ServiceRequest", "/service-requests", "服务请求",
    ServiceRequestCreate, ServiceRequestUpdate, ServiceRequestResponse)
feedback = build_crud_router(
    "Feedback", "/feedback", "客人评价", FeedbackCreate, FeedbackUpdate, FeedbackResponse)
support_requests = build_crud_router(
    "SupportRequest", "/support-requests", "支持请求",
    SupportRequestCreate, SupportRequestUpdate, SupportRequestResponse)

routers = [guests, housekeeping, services, expenses, service_requests, feedback, support_requests]
