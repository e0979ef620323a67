from fastapi import FastAPI
from contextlib import asynccontextmanager
from app.core.config import CORS_ORIGINS
from app.core.logging import configure_logging
from app.database import create_db_and_tables
from app.api import auth, auth_extra, dashboard, periods, transactions
from fastapi.middleware.cors import CORSMiddleware

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    create_db_and_tables()
    yield

app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(auth_extra.router)
app.include_router(transactions.router)
app.include_router(periods.router)
app.include_router(dashboard.router)

@app.get("/")
def root():
    return {"message": "Servidor de finanzas personales"}
