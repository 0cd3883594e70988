"""配置 Schema 验证器

提供基于 JSON Schema 的配置验证功能
"""

from typing import Any, Optional, Dict, List

from jsonschema import ValidationError, validate
from loguru import logger

from .schema import EXPORT_CONFIG_SCHEMA, EXPORT_CONFIG_SCHEMA_NAME


class ConfigValidationError(Exception):
    """配置验证错误"""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        message = super().__str__()
        if self.errors:
            return f"{message}: {'; '.join(self.errors)}"
        return message


class ConfigValidator:
    """配置验证器

    使用 JSON Schema 验证配置
    """

    def __init__(self):
        self._schemas: Dict[str, dict] = {}

    def register_schema(self, name: str, schema: dict) -> None:
        """注册 Schema

        Args:
            name: Schema 名称
            schema: Schema 字典
        """
        self._schemas[name] = schema
        logger.debug(f"已注册 Schema: {name}")

    def validate(self, config: dict, schema_name: str) -> bool:
        """验证配置

        Args:
            config: 配置字典
            schema_name: Schema 名称

        Returns:
            是否验证通过

        Raises:
            ConfigValidationError: 验证失败
        """
        if schema_name not in self._schemas:
            raise ConfigValidationError(f"Schema 不存在: {schema_name}")

        try:
            validate(instance=config, schema=self._schemas[schema_name])
        except ValidationError as e:
            errors = self._format_validation_error(e)
            raise ConfigValidationError(
                f"配置无效 ({schema_name})", errors=errors
            ) from e

        logger.debug(f"配置验证通过: {schema_name}")
        return True

    def _format_validation_error(self, error: Any) -> List[str]:
        """格式化验证错误

        Args:
            error: jsonschema ValidationError

        Returns:
            错误信息列表
        """
        errors = [str(error.message)]

        if error.path:
            path_str = " -> ".join(str(p) for p in error.path)
            errors.append(f"路径: {path_str}")

        return errors


# 全局验证器实例
_global_validator: Optional[ConfigValidator] = None


def get_validator() -> ConfigValidator:
    """获取全局配置验证器实例（已注册导出配置 Schema）

    Returns:
        配置验证器实例
    """
    global _global_validator
    if _global_validator is None:
        _global_validator = ConfigValidator()
        _global_validator.register_schema(
            EXPORT_CONFIG_SCHEMA_NAME, EXPORT_CONFIG_SCHEMA
        )
    return _global_validator


__all__ = [
    "ConfigValidationError",
    "ConfigValidator",
    "get_validator",
]
