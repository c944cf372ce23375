from fastapi import APIRouter
from reviewhub.routers import auth, organization, employees, reviews, reports

# Routers are aggregated here; main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(organization.router, tags=["Organization"])
api_router.include_router(employees.router, tags=["Employees"])
api_router.include_router(reviews.router, tags=["Reviews"])
api_router.include_router(reports.router, tags=["Reports"])
