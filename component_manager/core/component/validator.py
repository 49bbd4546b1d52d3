"""组件结构校验

按顺序检查，遇到第一个失败即返回:
  1. 组件存在
  2. 组件属于可复用组件类
  3. 组件地址存在且内容非空
  4. 组件安装方法存在
"""

from __future__ import annotations

import logging

from component_manager.core.exceptions import ValidationError
from component_manager.core.models import ComponentDescriptor, ValidationFailure

logger = logging.getLogger(__name__)

_MESSAGES = {
    ValidationFailure.NOT_FOUND: "组件不存在",
    ValidationFailure.NOT_REUSABLE: "组件不是可复用组件",
    ValidationFailure.NO_ADDRESS: "组件地址缺失或为空",
    ValidationFailure.NO_INSTALLATION_METHOD: "组件安装方法缺失",
}


class ComponentValidator:
    """组件校验器（只读，无副作用）"""

    def validate(
        self, descriptor: ComponentDescriptor,
    ) -> tuple[bool, ValidationFailure | None]:
        reason = self._first_failure(descriptor)
        if reason is None:
            logger.debug("组件校验通过: %s", descriptor.identifier)
            return True, None
        logger.warning(
            "%s: %s", describe_failure(reason), descriptor.identifier,
            extra={"component": descriptor.identifier, "stage": "validate"},
        )
        return False, reason

    def check(self, descriptor: ComponentDescriptor) -> None:
        """校验失败时抛 ValidationError"""
        ok, reason = self.validate(descriptor)
        if not ok and reason is not None:
            raise ValidationError(descriptor.identifier, describe_failure(reason))

    @staticmethod
    def _first_failure(descriptor: ComponentDescriptor) -> ValidationFailure | None:
        if not descriptor.is_valid:
            return ValidationFailure.NOT_FOUND
        if not descriptor.is_reusable:
            return ValidationFailure.NOT_REUSABLE
        if not descriptor.address:
            return ValidationFailure.NO_ADDRESS
        if not descriptor.installation_method:
            return ValidationFailure.NO_INSTALLATION_METHOD
        return None


def describe_failure(reason: ValidationFailure) -> str:
    return _MESSAGES[reason]
