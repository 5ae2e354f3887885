"""
Example: fetch and create spots with typed requests.
"""

import logging
import os
from typing import List, Optional

from pydantic import BaseModel

from typed_request import (
    Method,
    QueueConfig,
    RequestQueue,
    ResponseListener,
    TypedRequest,
    configure_default_codec,
)
from typed_request.logging_setup import setup_structured_logger

API_BASE = os.getenv("SPOTS_API_BASE", "https://api.example.com")


class Spot(BaseModel):
    id: int
    title: str
    city: Optional[str] = None


class SpotCreate(BaseModel):
    title: str
    city: Optional[str] = None


class SpotsListener(ResponseListener[List[Spot]]):
    def on_success(self, response):
        for spot in response:
            print(f"{spot.id}: {spot.title}")

    def on_error(self, error, status_code):
        print(f"Could not load spots ({status_code}): {error}")


class CreatedListener(ResponseListener[Spot]):
    def on_success(self, response):
        print(f"Created spot {response.id}")

    def on_error(self, error, status_code):
        print(f"Could not create spot ({status_code}): {error}")


def main():
    setup_structured_logger(logging.INFO)
    configure_default_codec(lambda settings: settings.model_copy(update={"exclude_none": True}))

    with RequestQueue(config=QueueConfig.from_env()) as queue:
        listing = TypedRequest(
            Method.GET,
            f"{API_BASE}/v1/spots",
            listener=SpotsListener(),
            response_type=List[Spot],
            params={"city": "chicago", "cursor": None},
        )
        create = TypedRequest(
            Method.POST,
            f"{API_BASE}/v1/spots",
            listener=CreatedListener(),
            response_type=Spot,
            entity=SpotCreate(title="Wacker Garage"),
            timeout_ms=10000,
        )
        create.add_accepted_status_codes([409])

        for future in (queue.add(listing), queue.add(create)):
            future.result()


if __name__ == "__main__":
    main()
