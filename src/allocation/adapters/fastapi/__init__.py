"""FastAPI adapter – HTTP entrypoint and error mapping."""
from allocation.adapters.fastapi.app import create_app
from allocation.adapters.fastapi.exception_mapper import FastAPIExceptionMapper

__all__ = ["FastAPIExceptionMapper", "create_app"]
