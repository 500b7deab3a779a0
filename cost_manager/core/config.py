from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App settings
    PROJECT_NAME: str = "CostManager"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Storage: "dynamo" for DynamoDB, "memory" for a process-local store
    STORAGE_BACKEND: Literal["dynamo", "memory"] = Field(default="dynamo")

    # DynamoDB
    DYNAMO_REGION: str = Field(default="eu-west-1")
    DYNAMO_ENDPOINT_URL: Optional[str] = Field(default=None)  # e.g. http://localhost:8000 for DynamoDB Local
    DYNAMO_USERS_TABLE: str = Field(default="cost-manager-users")
    DYNAMO_COSTS_TABLE: str = Field(default="cost-manager-costs")

    CORS_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:8000",
        ]
    )

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()
