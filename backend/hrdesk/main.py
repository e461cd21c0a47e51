from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hrdesk.config import settings
from hrdesk.core.logger import get_logger
from hrdesk.database.base import Base
from hrdesk.database.session import engine
from hrdesk.models.attendance import AttendanceRecord  # noqa: F401
from hrdesk.models.attendance_edit_history import AttendanceEditHistory  # noqa: F401
from hrdesk.models.break_session import BreakSession  # noqa: F401
from hrdesk.models.penalty import Penalty  # noqa: F401
from hrdesk.models.user import Employee  # noqa: F401
from hrdesk.models.warning import EmployeeWarning  # noqa: F401
from hrdesk.routes import admin, attendance, auth, breaks, reports, warnings

logger = get_logger("hrdesk", settings.LOG_FILE)

app = FastAPI(title="hrdesk")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def create_tables():
    Base.metadata.create_all(bind=engine)
    logger.info(f"hrdesk started (pay cycle starts on day {settings.PAY_CYCLE_START_DAY})")


def _format_validation_messages(exc: RequestValidationError) -> list[str]:
    messages: list[str] = []
    for err in exc.errors():
        loc = [str(v) for v in err.get("loc", []) if str(v) not in {"body", "query", "path"}]
        field = ".".join(loc) if loc else "field"
        err_type = str(err.get("type", ""))
        message = str(err.get("msg", "Invalid value"))

        if err_type == "value_error":
            # Custom validators already carry a readable sentence.
            messages.append(message.removeprefix("Value error, "))
        elif err_type in {"missing", "value_error.missing"}:
            messages.append(f"{field} is required")
        elif "string_too_short" in err_type:
            messages.append(f"{field} cannot be empty")
        elif field:
            messages.append(f"{field}: {message}")
        else:
            messages.append(message)

    # Preserve order while de-duplicating.
    return list(dict.fromkeys(messages))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = _format_validation_messages(exc)
    detail = messages[0] if len(messages) == 1 else "Validation failed"
    logger.debug(f"Validation failed on {request.method} {request.url.path}: {messages}")
    return JSONResponse(
        status_code=422,
        content={
            "detail": detail,
            "errors": messages,
        },
    )


app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
app.include_router(breaks.router)
app.include_router(breaks.admin_router)
app.include_router(warnings.router)
app.include_router(warnings.penalty_router)
app.include_router(reports.router)
