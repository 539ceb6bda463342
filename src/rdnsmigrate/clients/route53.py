from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import boto3

logger = logging.getLogger(__name__)


def short_zone_id(zone_id: str) -> str:
    """``/hostedzone/Z123`` -> ``Z123``."""
    return zone_id.split("/")[-1]


@dataclass
class Route53Client:
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    region_name: Optional[str] = None
    client: Any = field(default=None, repr=False)

    def _route53(self) -> Any:
        if self.client is None:
            session = boto3.Session(
                aws_access_key_id=self.access_key_id or None,
                aws_secret_access_key=self.secret_access_key or None,
                region_name=self.region_name or None,
            )
            self.client = session.client("route53")
        return self.client

    def get_hosted_zone(self, zone_id: str) -> Dict[str, Any]:
        resp = self._route53().get_hosted_zone(Id=zone_id)
        zone = resp["HostedZone"]
        logger.info("Found Route 53 hosted zone %s id=%s", zone.get("Name"), zone["Id"])
        return zone

    def list_record_sets(
        self, zone_id: str, start_name: str, start_type: str = "A"
    ) -> List[Dict[str, Any]]:
        resp = self._route53().list_resource_record_sets(
            HostedZoneId=zone_id,
            StartRecordName=start_name,
            StartRecordType=start_type,
        )
        record_sets = resp.get("ResourceRecordSets", [])
        logger.info(
            "Fetched Route 53 record sets for zone=%s start=%s count=%s",
            zone_id,
            start_name,
            len(record_sets),
        )
        return record_sets

    def upsert_record_set(self, zone_id: str, record_set: Dict[str, Any]) -> Dict[str, Any]:
        resp = self._route53().change_resource_record_sets(
            HostedZoneId=zone_id,
            ChangeBatch={
                "Changes": [
                    {
                        "Action": "UPSERT",
                        "ResourceRecordSet": record_set,
                    }
                ]
            },
        )
        change = resp["ChangeInfo"]
        logger.info(
            "Upserted Route 53 record set %s %s change=%s status=%s",
            record_set.get("Name"),
            record_set.get("Type"),
            change.get("Id"),
            change.get("Status"),
        )
        return change
