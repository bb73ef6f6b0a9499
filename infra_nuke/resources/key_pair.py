"""
EC2 key pairs.

Key pair names are unique within a region, so the name is used as the
identifier. ``DescribeKeyPairs`` is not paginated.
"""

from __future__ import annotations

from typing import List

from infra_nuke.core.base_resource import BaseResource, ResourceDescriptor


class KeyPair(BaseResource):
    """EC2 key pairs in one region."""

    resource_type = "ec2-keypair"
    display_name = "EC2 Key Pairs"

    ERROR_MESSAGES = {
        "InvalidKeyPair.NotFound": "Key pair no longer exists",
        "UnauthorizedOperation": "Insufficient permissions to delete key pair",
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
        response = self.ec2_client.describe_key_pairs()
        return [
            ResourceDescriptor(
                identifier=key["KeyName"],
                display_name=key["KeyName"],
                creation_time=key.get("CreateTime"),
            )
            for key in response.get("KeyPairs", [])
        ]

    def delete_one(self, identifier: str) -> None:
        self.ec2_client.delete_key_pair(KeyName=identifier)
