"""
Contract Validators: проверка JSON запросов по JSON Schema

Вызывающий код (CLI, analysis pipeline) передаёт параметры в datautils
как dict. Перед построением pydantic модели dict проверяется по одному
из контрактов в contracts/schema/:

    int_format      → IntFormat
    window_request  → WindowRequest

Один параметризованный ContractValidator обслуживает все контракты;
экземпляры кэшируются по имени контракта (validator_for).
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Iterator, Mapping

from jsonschema import Draft202012Validator, SchemaError, ValidationError

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# contracts/schema/ в корне репозитория (src/datautils/contracts → корень)
DEFAULT_SCHEMA_DIR: Final[Path] = Path(__file__).resolve().parents[3] / "contracts" / "schema"

# Известные контракты: имя файла схемы без .json
CONTRACT_NAMES: Final[tuple[str, ...]] = ("int_format", "window_request")


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Чтение и meta-валидация файлов схем из одного каталога.

    Каждая схема читается с диска один раз; повторный load_schema
    возвращает тот же dict.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._cache: dict[str, dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, name: str) -> dict[str, Any]:
        """
        Raises:
            FileNotFoundError: Нет файла <name>.json
            ValueError: Файл не является Draft 2020-12 схемой
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        self._cache[name] = schema
        return schema


# =============================================================================
# CONTRACT VALIDATOR
# =============================================================================


class ContractValidator:
    """
    Валидатор одного именованного контракта.

    Args:
        name: Имя контракта из CONTRACT_NAMES
        loader: Источник схем (default: contracts/schema/ репозитория)

    Raises:
        ValueError: Неизвестное имя контракта
    """

    def __init__(self, name: str, loader: SchemaLoader | None = None):
        if name not in CONTRACT_NAMES:
            raise ValueError(f"Unknown contract {name!r}, expected one of {list(CONTRACT_NAMES)}")
        self.name = name
        self._validator = Draft202012Validator((loader or SchemaLoader()).load_schema(name))

    def validate(self, data: Mapping[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Первое найденное нарушение контракта
        """
        self._validator.validate(data)

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        return self._validator.is_valid(data)

    def iter_errors(self, data: Mapping[str, Any]) -> Iterator[ValidationError]:
        return self._validator.iter_errors(data)

    def error_messages(self, data: Mapping[str, Any]) -> list[str]:
        """Все нарушения в виде '<json path>: <message>', отсортированные по пути"""
        errors = sorted(self.iter_errors(data), key=lambda e: list(map(str, e.path)))
        return [f"{e.json_path}: {e.message}" for e in errors]


@lru_cache(maxsize=None)
def validator_for(name: str) -> ContractValidator:
    """Кэшированный валидатор контракта по имени"""
    return ContractValidator(name)


def validate_contract(name: str, data: Mapping[str, Any]) -> None:
    """
    Проверка data по контракту name.

    Raises:
        ValueError: Неизвестное имя контракта
        jsonschema.ValidationError: data не соответствует контракту
    """
    validator_for(name).validate(data)
