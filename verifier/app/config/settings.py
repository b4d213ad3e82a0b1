"""Settings for the contract verifier messaging adapter."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    messaging_type: str = Field("", validation_alias="MESSAGING_TYPE")

    kafka_bootstrap_servers: str = Field("", validation_alias="SPRING_KAFKA_BOOTSTRAP_SERVERS")

    rabbitmq_addresses: str = Field("", validation_alias="SPRING_RABBITMQ_ADDRESSES")
    rabbitmq_username: str = Field("guest", validation_alias="SPRING_RABBITMQ_USERNAME")
    rabbitmq_password: str = Field("guest", validation_alias="SPRING_RABBITMQ_PASSWORD")
    rabbitmq_virtual_host: str = Field("/", validation_alias="SPRING_RABBITMQ_VIRTUAL_HOST")

    consumer_backend: str = Field("broker", validation_alias="CONSUMER_BACKEND")
    receive_timeout_seconds: float = Field(5.0, validation_alias="RECEIVE_TIMEOUT_SECONDS")

    initial_backoff_seconds: float = Field(0.5, validation_alias="INITIAL_BACKOFF_SECONDS")
    max_backoff_seconds: float = Field(5.0, validation_alias="MAX_BACKOFF_SECONDS")
    max_connection_attempts: int = Field(5, validation_alias="MAX_CONNECTION_ATTEMPTS")
    backoff_multiplier: float = Field(2.0, validation_alias="BACKOFF_MULTIPLIER")
