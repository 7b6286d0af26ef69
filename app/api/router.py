from fastapi import APIRouter
from app.api.routes.complaints import router as complaints_router
from app.api.routes.complaint_types import router as complaint_types_router
from app.api.routes.users import router as users_router
from app.api.routes.applicant_statuses import router as applicant_statuses_router

api_router = APIRouter()

api_router.include_router(complaints_router, prefix="/complaints", tags=["complaints"])
api_router.include_router(complaint_types_router, prefix="/complaint-types", tags=["complaint types"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(applicant_statuses_router, prefix="/applicant-statuses", tags=["applicant statuses"])
