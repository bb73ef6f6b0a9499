"""
EC2 security groups.

The ``default`` security group of a VPC cannot be deleted, so it is never
listed as a candidate. EC2 does not report a creation time for security
groups; age filters therefore never select them.
"""

from __future__ import annotations

import logging
from typing import List

from infra_nuke.core.base_resource import BaseResource, ResourceDescriptor

logger = logging.getLogger(__name__)


class SecurityGroup(BaseResource):
    """Non-default EC2 security groups in one region."""

    resource_type = "security-group"
    display_name = "Security Groups"

    ERROR_MESSAGES = {
        "DependencyViolation": "Security group is still in use by another resource",
        "InvalidGroup.NotFound": "Security group no longer exists",
        "InvalidGroup.InUse": "Security group is referenced by another security group",
        "UnauthorizedOperation": "Insufficient permissions to delete security group",
        "CannotDelete": "Default security groups cannot be deleted",
    }

    def __init__(self, aws_client) -> None:
        super().__init__(aws_client)
        self._ec2_client = None

    @property
    def ec2_client(self):
        """Lazy load EC2 client."""
        if self._ec2_client is None:
            self._ec2_client = self.aws_client.get_ec2_client()
        return self._ec2_client

    def list_candidates(self) -> List[ResourceDescriptor]:
        descriptors = []
        skipped = 0
        paginator = self.ec2_client.get_paginator("describe_security_groups")
        for page in paginator.paginate():
            for sg in page.get("SecurityGroups", []):
                if sg["GroupName"] == "default":
                    skipped += 1
                    continue
                descriptors.append(
                    ResourceDescriptor(
                        identifier=sg["GroupId"],
                        display_name=sg["GroupName"],
                    )
                )
        logger.debug(f"Skipped {skipped} default security groups in {self.region}")
        return descriptors

    def delete_one(self, identifier: str) -> None:
        self.ec2_client.delete_security_group(GroupId=identifier)
