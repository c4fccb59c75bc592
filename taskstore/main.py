# taskstore/main.py
import logging
from fastapi import FastAPI, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncEngine
from taskstore.config import settings
from taskstore.core.errors import StoreUnreachableError
from taskstore.database import connect, ping, close, init_schema, get_engine
from taskstore.routers import task

app = FastAPI(title="Task Store", version="1.0")

# Include Routers
app.include_router(task.router)

@app.on_event("startup")
async def startup_event():
    app.state.engine = await connect(settings)
    # schema normally comes from db_init/init.sql
    if settings.DB_CREATE_SCHEMA:
        await init_schema(app.state.engine)

@app.on_event("shutdown")
async def shutdown_event():
    engine = getattr(app.state, "engine", None)
    if engine is not None:
        await close(engine)

@app.get("/")
def read_root():
    return {"message": "Welcome to Task Store"}

@app.get("/health")
async def health(engine: AsyncEngine = Depends(get_engine)):
    try:
        await ping(engine)
    except StoreUnreachableError:
        raise HTTPException(503, "Database not responding")
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("taskstore.main:app", host="0.0.0.0", port=8000, reload=True)
