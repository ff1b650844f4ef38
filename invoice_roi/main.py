"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from invoice_roi.calculator import routes as calculator_routes
from invoice_roi.config import settings
from invoice_roi.database import init_db
from invoice_roi.errors import DuplicateNameError, NotFoundError, ROIError, ValidationError
from invoice_roi.middleware import setup_rate_limiting
from invoice_roi.reports import routes as report_routes
from invoice_roi.scenarios import routes as scenario_routes

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

ERROR_STATUS = {
    ValidationError: 422,
    DuplicateNameError: 409,
    NotFoundError: 404,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        await init_db()
    yield


# Create FastAPI app
app = FastAPI(
    title="Invoice ROI API",
    description="ROI projections for automating accounts-payable invoice processing",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_rate_limiting(app)


@app.exception_handler(ROIError)
async def roi_error_handler(request: Request, exc: ROIError):
    status_code = ERROR_STATUS.get(type(exc), 400)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder(ValidationError(fields).to_dict()),
    )


# Include routers
app.include_router(calculator_routes.router, prefix=settings.API_V1_PREFIX, tags=["Calculator"])
app.include_router(scenario_routes.router, prefix=f"{settings.API_V1_PREFIX}/scenarios", tags=["Scenarios"])
app.include_router(report_routes.router, prefix=f"{settings.API_V1_PREFIX}/reports", tags=["Reports"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Invoice ROI API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "invoice_roi.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
