import logging
from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.orm import Session
from core.config import CORS_ORIGINS, LOG_LEVEL, OTP_CLEANUP_INTERVAL_MINUTES, PORT
from core.database import Base, engine, get_db
from repositories.identity_record_repository import IdentityRecordRepository
from routers.identity_router import router as identity_router
from services.otp_cleanup import OTPCleanup
from services.otp_store import aadhaar_otp_store, pan_otp_store
import models.identity_record

logging.basicConfig( level=LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

otp_cleanup = OTPCleanup([aadhaar_otp_store, pan_otp_store], interval_minutes=OTP_CLEANUP_INTERVAL_MINUTES)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting identity verification backend...")
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables created")

    otp_cleanup.start()

    yield

    otp_cleanup.stop()
    logger.info("Identity verification backend stopped")

app = FastAPI(title="Identity Verification Module", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    error = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    )
    logger.info(f"Rejected malformed request to {request.url.path}: {error}")
    return JSONResponse(status_code=400, content={"message": "Invalid request body.", "error": error})

app.include_router(identity_router)

@app.get("/")
def root(db: Session = Depends(get_db)):
    return {
        "status": "Identity verification API is running",
        "records": IdentityRecordRepository.count_records(db),
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=PORT)
