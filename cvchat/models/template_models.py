"""Resume template catalog models."""

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class ResumeTemplate(BaseModel):
    """A named visual style for the rendered resume."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    description: str = ""
    image: str = ""
    gradient: Tuple[str, str] = ("#4C6EF5", "#3B5BDB")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Some backends hand out numeric ids.
        if isinstance(value, int):
            return str(value)
        return value


class TemplateUpdate(BaseModel):
    """Partial update for `PUT /templates/:id`."""

    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    gradient: Optional[Tuple[str, str]] = None

    def to_payload(self):
        return self.model_dump(exclude_none=True)


INITIAL_TEMPLATE = ResumeTemplate(
    id="1",
    name="Modern Professional",
    image="https://picsum.photos/400/600",
    description="Clean and modern",
    gradient=("#4C6EF5", "#3B5BDB"),
)
