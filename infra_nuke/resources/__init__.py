"""
Nukeable Resource Types
=======================

Each resource type is a :class:`~infra_nuke.core.base_resource.BaseResource`
that lists and deletes one kind of AWS resource in one region.

Available Resource Types
------------------------
apigateway
    API Gateway (v1) REST APIs.
ec2-keypair
    EC2 key pairs.
security-group
    Non-default EC2 security groups.

Example
-------
>>> from infra_nuke.resources import get_resource_class
>>> ApiGateway = get_resource_class("apigateway")
"""

from typing import Dict, Iterable, List, Optional, Type

from infra_nuke.core.base_resource import BaseResource
from infra_nuke.core.exceptions import ConfigError
from infra_nuke.resources.apigateway import ApiGateway
from infra_nuke.resources.key_pair import KeyPair
from infra_nuke.resources.security_group import SecurityGroup

RESOURCE_TYPES: Dict[str, Type[BaseResource]] = {
    cls.resource_type: cls for cls in (ApiGateway, KeyPair, SecurityGroup)
}


def get_resource_class(resource_type: str) -> Type[BaseResource]:
    """
    Look up a resource class by its command line name.

    Raises
    ------
    ConfigError
        If the resource type is not supported.
    """
    try:
        return RESOURCE_TYPES[resource_type]
    except KeyError:
        raise ConfigError(
            f"Unknown resource type '{resource_type}'",
            details={"supported": sorted(RESOURCE_TYPES)},
        )


def resolve_resource_types(
    include: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
) -> List[Type[BaseResource]]:
    """
    Resource classes to process, in registry order.

    An empty ``include`` means every supported type.
    """
    include = list(include or [])
    exclude = list(exclude or [])
    for name in include + exclude:
        get_resource_class(name)

    names = include or list(RESOURCE_TYPES)
    return [RESOURCE_TYPES[n] for n in RESOURCE_TYPES if n in names and n not in exclude]


__all__ = [
    "ApiGateway",
    "KeyPair",
    "SecurityGroup",
    "RESOURCE_TYPES",
    "get_resource_class",
    "resolve_resource_types",
]
