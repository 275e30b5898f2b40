from fastapi import FastAPI
from routes import account, admin, mechanic, services
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

app = FastAPI(title="Mechanic Shop API")

app.include_router(account.router)
app.include_router(mechanic.router)
app.include_router(services.router)
app.include_router(admin.router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
def home():
    return {"message": "Mechanic Shop API is live"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
