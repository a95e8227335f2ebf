from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from config import cors_origins
from database import engine, Base
from routes import (
    users_router,
    guidance_router,
    todos_router,
    quiz_router,
    hukamnama_router,
    community_router,
    llm_router,
    system_router,
)

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Rooh da Safar API",
    description="Gurbani guidance, spiritual to-dos and Seva points",
    version="1.0.0",
)

# CORS settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router)
app.include_router(guidance_router)
app.include_router(todos_router)
app.include_router(quiz_router)
app.include_router(hukamnama_router)
app.include_router(community_router)
app.include_router(llm_router)
app.include_router(system_router)


@app.middleware("http")
async def utf8_charset_middleware(request: Request, call_next):
    # Gurmukhi payloads need an explicit charset for some clients
    response = await call_next(request)
    ct = response.headers.get("content-type", "")
    if "application/json" in ct and "charset" not in ct:
        response.headers["content-type"] = ct + "; charset=utf-8"
    return response


@app.get("/")
async def root():
    return {
        "message": "Rooh da Safar API - Gurbani guidance for the soul's journey",
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
