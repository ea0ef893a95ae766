"""HTTP panel service (FastAPI app + in-memory panel store)."""
