"""组件注册表适配器

知识库之上的只读视图：标识符 -> ComponentDescriptor。
每次调用都重新查询知识库，不做缓存。
"""

from __future__ import annotations

import logging

from component_manager.core.exceptions import ComponentNotFoundError
from component_manager.core.models import ComponentDescriptor
from component_manager.core.store import KnowledgeStore

logger = logging.getLogger(__name__)

# 知识库中的关键节点
CONCEPT_REUSABLE_COMPONENT = "concept_reusable_component"
NREL_COMPONENT_ADDRESS = "nrel_component_address"
NREL_INSTALLATION_METHOD = "nrel_installation_method"
NREL_COMPONENT_DEPENDENCIES = "nrel_component_dependencies"


class ComponentRegistry:
    """组件注册表 - 从知识库读取组件描述"""

    def __init__(self, store: KnowledgeStore) -> None:
        self.store = store

    def describe(self, identifier: str) -> ComponentDescriptor:
        """查询组件描述；标识符不存在时返回 entity=None 的描述"""
        entity = self.store.find_by_identifier(identifier)
        if entity is None:
            return ComponentDescriptor(identifier=identifier)

        methods = self.store.get_outgoing_relation(entity, NREL_INSTALLATION_METHOD)
        dependencies = self.store.get_outgoing_relation(entity, NREL_COMPONENT_DEPENDENCIES)
        return ComponentDescriptor(
            identifier=identifier,
            entity=entity,
            is_reusable=self.store.has_class_membership(entity, CONCEPT_REUSABLE_COMPONENT),
            address=self.store.get_attribute_content(entity, NREL_COMPONENT_ADDRESS),
            installation_method=self.store.get_identifier(methods[0]) if methods else "",
            dependencies=tuple(self.store.get_identifier(d) for d in dependencies),
        )

    def require(self, identifier: str) -> ComponentDescriptor:
        """查询组件描述，标识符不存在时抛 ComponentNotFoundError"""
        descriptor = self.describe(identifier)
        if not descriptor.is_valid:
            raise ComponentNotFoundError(identifier)
        return descriptor
