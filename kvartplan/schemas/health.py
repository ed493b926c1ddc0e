# This project was developed with assistance from AI tools.
"""Health check schema."""

from pydantic import BaseModel


class ServiceHealth(BaseModel):
    name: str
    status: str
