from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	# Shared OpenRouter credential; per-task keys below take precedence
	openrouter_api_key: str | None = Field(default=None, validation_alias="OPENROUTER_API_KEY")
	# JSON objects keyed by task type, e.g. {"quiz": "sk-or-..."}
	openrouter_task_api_keys: dict[str, str] = Field(default_factory=dict, validation_alias="OPENROUTER_TASK_API_KEYS")
	openrouter_task_models: dict[str, str] = Field(default_factory=dict, validation_alias="OPENROUTER_TASK_MODELS")
	openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1", validation_alias="OPENROUTER_BASE_URL")
	openrouter_referer: str = Field(default="http://localhost:3000", validation_alias="OPENROUTER_HTTP_REFERER")
	openrouter_title: str = Field(default="EduSmart AI", validation_alias="OPENROUTER_TITLE")
	openrouter_timeout_seconds: float = Field(default=60.0, validation_alias="OPENROUTER_TIMEOUT_SECONDS")

	# Fast-path bound for /generate-short-answer; 0 disables it
	short_answer_timeout_seconds: float = Field(default=5.0, validation_alias="SHORT_ANSWER_TIMEOUT_SECONDS")

	# Fixed-window limiter on the generation endpoints
	rate_limit_max_requests: int = Field(default=100, validation_alias="RATE_LIMIT_MAX_REQUESTS")
	rate_limit_window_seconds: int = Field(default=15 * 60, validation_alias="RATE_LIMIT_WINDOW_SECONDS")

	# "development" allows any CORS origin; anything else uses cors_origins
	environment: str = Field(default="development", validation_alias="ENVIRONMENT")
	cors_origins: list[str] = Field(
		default_factory=lambda: ["https://yourdomain.com", "https://www.yourdomain.com"],
		validation_alias="CORS_ORIGINS",
	)
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	# When false every generation failure is a 500, as the public API always did
	distinct_error_status: bool = Field(default=False, validation_alias="DISTINCT_ERROR_STATUS")

	host: str = Field(default="0.0.0.0", validation_alias="HOST")
	port: int = Field(default=3000, validation_alias="PORT")

	model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

	@property
	def is_production(self) -> bool:
		return self.environment.lower() == "production"

settings = Settings()
