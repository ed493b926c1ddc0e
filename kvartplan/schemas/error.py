# This project was developed with assistance from AI tools.
"""RFC 7807 Problem Details error response schema."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Problem Details body returned for every non-2xx response.

    See https://datatracker.ietf.org/doc/html/rfc7807
    """

    type: str = Field(default="about:blank", description="Problem type URI.")
    title: str = Field(description="Short summary of the HTTP status.")
    status: int
    detail: str = Field(default="", description="What went wrong with this request.")
    request_id: str = Field(
        default="",
        description="Echo of the x-request-id header, or a generated UUID.",
    )
    instance: str = Field(default="", description="Request path that produced the error.")
