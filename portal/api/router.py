from fastapi import APIRouter
from portal.modules.auth.router import router as auth_router
from portal.modules.student.router import router as student_router
from portal.modules.grades.router import router as grades_router
from portal.modules.kardex.router import router as kardex_router
from portal.modules.class_schedule.router import router as class_schedule_router
from portal.modules.appointments.router import router as appointments_router

api_router = APIRouter()
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(student_router, prefix="/student", tags=["student"])
api_router.include_router(grades_router, prefix="/student", tags=["grades"])
api_router.include_router(kardex_router, prefix="/student", tags=["kardex"])
api_router.include_router(class_schedule_router, prefix="/student", tags=["schedule"])
api_router.include_router(appointments_router, prefix="/appointments", tags=["appointments"])
# appointments_router also serves /staff/... (directory + availability)

@api_router.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}
