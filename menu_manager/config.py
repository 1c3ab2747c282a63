"""Settings for the menu manager, loaded from ``MENU_*`` env vars or ``.env``."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .catalog.schemas import MenuEntry


DEFAULT_ITEMS: List[MenuEntry] = [
    MenuEntry(id="signin", name="签到", description="每日签到获取积分",
              command="#签到", category="日常", order=1),
    MenuEntry(id="hitokoto", name="一言", description="获取一条随机名言或句子",
              command="#一言", category="娱乐", order=2),
    MenuEntry(id="music", name="点歌", description="点播指定歌曲",
              command="#点歌 [歌曲]", category="娱乐", order=3),
    MenuEntry(id="domain", name="域名查询", description="查询域名信息",
              command="#域名 [域名]", category="工具", order=4),
    MenuEntry(id="server", name="服务器状态", description="查询服务器状态信息",
              command="#服务器 (地址)", category="工具", order=5),
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MENU_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Catalog behaviour
    default_category: str = Field(default="通用功能", description="Category for entries added without one")
    enable_categories: bool = Field(default=True, description="Group menu entries by category")
    items_per_page: int = Field(default=10, ge=5, le=50, description="Entries per menu page")
    allow_user_suggestions: bool = Field(default=True, description="Accept menu.suggest from any user")
    admin_permission: str = Field(default="menu.admin", description="Capability required to edit the menu")
    admin_authority: Optional[int] = Field(
        default=None,
        ge=0,
        description="Authority level that implies admin rights; None ignores the authority level",
    )

    # Image menu
    enable_image_menu: bool = Field(default=False, description="Render the menu as an image")
    image_width: int = Field(default=1600, ge=800, le=2000, description="Image viewport width in px")
    image_height: int = Field(default=900, ge=200, description="Initial image viewport height in px")
    min_column_width: int = Field(default=400, ge=200, le=600, description="Minimum grid column width in px")
    footer_text: str = Field(default="💡 发送对应命令即可使用功能", description="Static footer line")
    render_service_url: Optional[str] = Field(default=None, description="Screenshot service endpoint")
    render_timeout: float = Field(default=15.0, gt=0, description="Rendering request timeout in seconds")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )

    default_items: List[MenuEntry] = Field(
        default_factory=lambda: [item.model_copy(deep=True) for item in DEFAULT_ITEMS],
        description="Entries seeded into the catalog at startup",
    )

    @field_validator("default_items")
    @classmethod
    def _unique_seed_ids(cls, items: List[MenuEntry]) -> List[MenuEntry]:
        seen = set()
        for item in items:
            if item.id in seen:
                raise ValueError(f"duplicate menu entry id in default_items: {item.id}")
            seen.add(item.id)
        return items

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


@lru_cache()
def get_settings() -> Settings:
    return Settings()
