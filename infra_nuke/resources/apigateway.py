"""
API Gateway (v1) REST APIs.

Listed with ``GetRestApis`` (paginated) and deleted one at a time with
``DeleteRestApi``; there is no bulk delete API.
"""

from __future__ import annotations

import logging
from typing import List

from infra_nuke.core.base_resource import BaseResource, ResourceDescriptor

logger = logging.getLogger(__name__)


class ApiGateway(BaseResource):
    """API Gateway (v1) REST APIs in one region."""

    resource_type = "apigateway"
    display_name = "API Gateways (v1)"

    ERROR_MESSAGES = {
        "NotFoundException": "REST API no longer exists",
        "ConflictException": "REST API is still referenced by another resource",
        "TooManyRequestsException": "Throttled by API Gateway",
        "UnauthorizedException": "Insufficient permissions to delete REST API",
        "AccessDeniedException": "Insufficient permissions to delete REST API",
    }

    def __init__(self, aws_client) -> None:
        super().__init__(aws_client)
        self._client = None

    @property
    def client(self):
        """Lazy load API Gateway client."""
        if self._client is None:
            self._client = self.aws_client.get_apigateway_client()
        return self._client

    def list_candidates(self) -> List[ResourceDescriptor]:
        descriptors = []
        paginator = self.client.get_paginator("get_rest_apis")
        for page in paginator.paginate():
            for api in page.get("items", []):
                descriptors.append(
                    ResourceDescriptor(
                        identifier=api["id"],
                        display_name=api.get("name"),
                        creation_time=api.get("createdDate"),
                    )
                )
        return descriptors

    def delete_one(self, identifier: str) -> None:
        self.client.delete_rest_api(restApiId=identifier)
