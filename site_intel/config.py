# === FILE: site_intel/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера SiteIntel.
Используется Pydantic для описания схемы и проверки данных.

Все бюджеты обхода (страницы, глубина, таймауты, пороги) передаются
краулеру явно через :class:`CrawlerConfig`, а не хранятся в константах модулей.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SiteIntelBot/1.0)"
DEFAULT_RENDER_PROXY = "https://r.jina.ai/"


class CrawlerConfig(BaseModel):
    """Конфигурация одного обхода сайта."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_pages: int = Field(20, ge=1, description="Жесткий лимит по числу страниц.")
    max_depth: int = Field(2, ge=0, description="Максимальная глубина обхода ссылок.")
    crawl_timeout: float = Field(30.0, gt=0, description="Общий бюджет времени обхода (секунд).")
    page_timeout: float = Field(8.0, gt=0, description="Таймаут на один HTML-запрос (секунд).")
    render_timeout: float = Field(15.0, gt=0, description="Таймаут запроса к прокси рендеринга (секунд).")
    thin_content_threshold: int = Field(
        500, ge=0, description="Суммарная длина текста, ниже которой сайт считается JS-рендерингом."
    )
    max_body_chars: int = Field(10_000, ge=1, description="Лимит текста одной страницы.")
    render_min_chars: int = Field(50, ge=0, description="Минимальный размер ответа прокси рендеринга.")
    render_subpage_limit: int = Field(4, ge=0, description="Сколько внутренних страниц дорендерить.")
    render_subpage_min_chars: int = Field(
        100, ge=0, description="Минимальный текст дорендеренной страницы."
    )
    max_services: int = Field(12, ge=0, description="Максимум извлекаемых услуг.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    render_proxy_url: str = Field(DEFAULT_RENDER_PROXY, min_length=1, description="Префикс URL прокси рендеринга.")
    render_enabled: bool = Field(True, description="Разрешить fallback через прокси рендеринга.")

    @field_validator("render_proxy_url", mode="after")
    @classmethod
    def _ensure_trailing_slash(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("render_proxy_url must be an http(s) URL")
        return v if v.endswith("/") else v + "/"


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без пути используется configs/default.yaml, а если его нет, значения по умолчанию.
    Явно указанный, но отсутствующий файл приводит к FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)
