"""配置管理模块 - 使用 Pydantic

集中管理所有配置项，支持环境变量、.env 文件和配置验证。
配置只影响默认传输层和可达性监视器，不改变单次调用的契约。
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseSettings):
    """客户端配置"""

    model_config = SettingsConfigDict(
        env_prefix="API_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # HTTP 请求超时（秒）
    http_timeout: float = Field(
        default=30.0, ge=1, le=300, description="HTTP 请求超时时间（秒）"
    )

    # SSL 验证
    verify_ssl: bool = Field(default=True, description="是否验证 SSL 证书")

    user_agent: str = Field(
        default="typed-api-client/0.1", description="请求头 User-Agent"
    )

    # 传输层线程池大小
    max_workers: int = Field(default=10, ge=1, le=100, description="最大并发请求数")

    # 严格解码（不做类型转换）
    strict_decoding: bool = Field(default=True, description="是否严格解码响应体")

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """去除首尾空白，不允许为空"""
        v = v.strip()
        if not v:
            raise ValueError("user_agent must not be empty")
        return v


class ReachabilityConfig(BaseSettings):
    """网络可达性配置"""

    model_config = SettingsConfigDict(
        env_prefix="REACHABILITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 探测目标
    probe_host: str = Field(default="1.1.1.1", description="探测主机")

    probe_port: int = Field(default=53, ge=1, le=65535, description="探测端口")

    # 单次探测超时（秒）
    probe_timeout: float = Field(
        default=3.0, ge=0.1, le=60, description="探测超时时间（秒）"
    )

    # 探测间隔（秒）
    probe_interval: float = Field(
        default=5.0, ge=0.5, le=3600, description="探测间隔（秒）"
    )


class Config(BaseSettings):
    """全局配置"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    client: ClientConfig = Field(default_factory=ClientConfig)
    reachability: ReachabilityConfig = Field(default_factory=ReachabilityConfig)

