import re

from pydantic import field_validator
from pydantic_settings import BaseSettings

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


class Settings(BaseSettings):
    APP_NAME: str = "Warehouse Inventory API"
    DATABASE_URL: str = "sqlite:///./warehouse.db"

    # Stored procedure behind /addProductToWarehouseWithProc, optionally schema-qualified
    ADD_PRODUCT_PROCEDURE: str = "AddProductToWarehouse"

    # "development" exposes /docs and /openapi.json
    ENVIRONMENT: str = "production"
    HTTPS_REDIRECT: bool = False

    # Create missing tables on startup (local SQLite convenience)
    CREATE_TABLES: bool = True

    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env"}

    @field_validator("ADD_PRODUCT_PROCEDURE")
    @classmethod
    def check_procedure_name(cls, v: str) -> str:
        # Interpolated into SQL: plain identifiers only
        if not _IDENTIFIER.match(v):
            raise ValueError(f"Invalid procedure name: {v!r}")
        return v


settings = Settings()
