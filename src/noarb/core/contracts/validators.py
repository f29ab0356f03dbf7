"""
JSON Schema Contract Validators

Модуль для валидации JSON снапшотов рынков согласно формальным JSON Schema
контрактам. Используется симуляторами и мониторингом, которые получают
состояние рынков извне, до построения Pydantic моделей.

Схемы (noarb/core/contracts/schema/):
- spot_market_view.json
- conditional_market_view.json
- band_snapshot.json (ссылается на две предыдущие)
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from referencing import Registry, Resource

from noarb.core.domain.market_views import BandSnapshot


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат рядом с модулем (package data), поэтому путь не зависит
    от способа установки пакета.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._registry: Registry | None = None

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без расширения, с meta-validation и кэшем.

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema

    def registry(self) -> Registry:
        """Registry всех схем каталога для межфайловых $ref (строится один раз)."""
        if self._registry is not None:
            return self._registry

        resources = []
        for schema_path in sorted(self._schema_dir.glob("*.json")):
            schema = self.load_schema(schema_path.stem)
            resources.append((schema["$id"], Resource.from_contents(schema)))
        self._registry = Registry().with_resources(resources)
        return self._registry


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Draft 2020-12 валидатор одной схемы с общим registry."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema, registry=_SCHEMA_LOADER.registry())

    def validate(self, data: Dict[str, Any]) -> None:
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class SpotMarketViewValidator(ContractValidator):
    """Валидатор для spot_market_view контракта."""

    def __init__(self):
        super().__init__("spot_market_view")


class ConditionalMarketViewValidator(ContractValidator):
    """Валидатор для conditional_market_view контракта."""

    def __init__(self):
        super().__init__("conditional_market_view")


class BandSnapshotValidator(ContractValidator):
    """Валидатор для band_snapshot контракта."""

    def __init__(self):
        super().__init__("band_snapshot")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_spot_market_view(data: Dict[str, Any]) -> None:
    """
    Валидация spot_market_view данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    SpotMarketViewValidator().validate(data)


def validate_conditional_market_view(data: Dict[str, Any]) -> None:
    """
    Валидация conditional_market_view данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    ConditionalMarketViewValidator().validate(data)


def validate_band_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация band_snapshot данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    BandSnapshotValidator().validate(data)


def load_band_snapshot(data: Dict[str, Any]) -> BandSnapshot:
    """
    Валидация payload и построение BandSnapshot.

    Raises:
        ValidationError: Если payload не соответствует схеме
    """
    validate_band_snapshot(data)
    return BandSnapshot.model_validate(data)
