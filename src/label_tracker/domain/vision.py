"""Models for vision service payloads."""

from pydantic import BaseModel, ConfigDict, Field


class ReadLine(BaseModel):
    """Single recognized line of text."""

    text: str


class ReadPage(BaseModel):
    """Recognized lines for one page of the image."""

    lines: list[ReadLine] = Field(default_factory=list)


class AnalyzeResult(BaseModel):
    """Pages returned by a finished read operation."""

    model_config = ConfigDict(populate_by_name=True)

    read_results: list[ReadPage] = Field(default_factory=list, alias="readResults")


class ReadOperation(BaseModel):
    """Status payload of an asynchronous read operation."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    analyze_result: AnalyzeResult | None = Field(default=None, alias="analyzeResult")

    @property
    def is_terminal(self) -> bool:
        return self.status in {"succeeded", "failed"}

    def text(self) -> str:
        """Join lines with spaces per page and pages with newlines."""
        if self.analyze_result is None:
            return ""
        return "\n".join(
            " ".join(line.text for line in page.lines)
            for page in self.analyze_result.read_results
        )


class Caption(BaseModel):
    """Caption candidate for an image."""

    text: str
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class ImageDescription(BaseModel):
    """Caption candidates, best first."""

    captions: list[Caption] = Field(default_factory=list)
