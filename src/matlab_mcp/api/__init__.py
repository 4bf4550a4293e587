"""HTTP transport: FastAPI application and uvicorn server wrapper."""
