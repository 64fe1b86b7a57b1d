from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_NAME: str = "Seller Quotes Service"
    ACCOUNT: str = "b2bstore"
    HOST: str = "b2bstore.myvtex.com"
    ROOT_PATH: str = "/"
    APP_TOKEN: str = ""

    MASTERDATA_BASE_URL: str = "https://b2bstore.vtexcommercestable.com.br"
    ORGANIZATIONS_GRAPHQL_URL: str = "http://b2b-organizations-graphql.vtex.local/_v/graphql"
    STOREFRONT_PERMISSIONS_GRAPHQL_URL: str = "http://storefront-permissions.vtex.local/_v/graphql"
    MAIL_SERVICE_URL: str = "http://mailservice.vtex.com.br/api/mail-service/pvt/sendmail"
    METRICS_URL: str = ""

    QUOTE_DATA_ENTITY: str = "quotes"
    QUOTE_SCHEMA_VERSION: str = "2.0"
    SALES_ADMIN_ROLE: str = "sales-admin"
    DEFAULT_PAGE_SIZE: int = 25
    REQUEST_TIMEOUT: float = 30.0

    CORS_ORIGINS: List[str] = ["*"]

    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
