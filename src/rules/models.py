from pydantic import BaseModel, Field


class RateLimitActionRules(BaseModel):
    action_key: str
    base_wait_hours: float = Field(default=1, gt=0)


class RateLimitRules(BaseModel):
    contact_form: RateLimitActionRules


class TimeRangeRules(BaseModel):
    week: int = 7
    month: int = 30
    quarter: int = 90


class AnalyticsRules(BaseModel):
    track_location: bool = False
    city_limit: int = Field(default=10, ge=1)
    zero_fill_daily: bool = True
    time_ranges: TimeRangeRules = Field(default_factory=TimeRangeRules)
    session_flag_ttl_seconds: int = 1800
    session_cleanup_interval_seconds: int = 1800


class ContactRules(BaseModel):
    name_max: int = 100
    email_max: int = 254
    message_max: int = 5000


class ProjectRules(BaseModel):
    title_max: int = 200


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)
    timezone: str | None = None


class Rules(BaseModel):
    rate_limits: RateLimitRules
    analytics: AnalyticsRules
    contact: ContactRules
    projects: ProjectRules
    ops: OpsRules
