"""Shared path parameter types."""

from typing import Annotated

from fastapi import Path

from taskhub_shared.schemas.common import MAX_ID

# Ids outside the column range can never match a row
ResourceId = Annotated[int, Path(gt=0, le=MAX_ID)]
