"""
Pydantic models for the settings blob and the embeddings API payloads.
"""

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, field_validator
from typing import List


class PluginSettings(BaseModel):
    """Key-value settings blob. Only `apiKey` is recognized, other keys are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    api_key: str = Field(default="", alias="apiKey")

    @field_validator('api_key', mode='before')
    @classmethod
    def api_key_must_be_string(cls, v):
        if v is None:
            return ""
        if not isinstance(v, str):
            raise ValueError('apiKey must be a string')
        return v.strip()

    def to_blob(self) -> dict:
        return self.model_dump(by_alias=True)


class EmbeddingRequest(BaseModel):
    input: str
    model: str


class EmbeddingDatum(BaseModel):
    embedding: List[FiniteFloat]
    index: int = 0


class EmbeddingResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: List[EmbeddingDatum]

    @field_validator('data')
    @classmethod
    def data_must_not_be_empty(cls, v):
        if not v:
            raise ValueError('response contains no embeddings')
        return v

    def first_embedding(self) -> List[float]:
        return self.data[0].embedding
