"""API routes."""

from clubhouse_payroll.api.routes.credits import router as credits_router
from clubhouse_payroll.api.routes.health import router as health_router
from clubhouse_payroll.api.routes.payroll import router as payroll_router

__all__ = ["credits_router", "health_router", "payroll_router"]
