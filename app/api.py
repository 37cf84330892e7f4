"""HTTP route definitions for the service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import PublishResponse, ReadingIn
from models.records import SensorReading
from services.publisher import PAYLOAD_ENCODING, ReadingPublisher, TransmitError, build_default_publisher

router = APIRouter()


def get_publisher() -> ReadingPublisher:
    return build_default_publisher()


@router.post(
    "/readings",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=PublishResponse,
    summary="Relay a sensor reading to the panel as a UDP datagram.",
)
def publish_reading(
    body: ReadingIn,
    publisher: ReadingPublisher = Depends(get_publisher),
) -> PublishResponse:
    reading = SensorReading(
        channel=body.channel,
        status=body.status,
        temperature=body.temperature,
    )
    try:
        payload = publisher.publish(reading)
    except TransmitError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc

    host, port = publisher.destination
    return PublishResponse(
        channel=reading.channel,
        status=reading.status,
        temperature=reading.temperature,
        payload=payload.decode(PAYLOAD_ENCODING),
        destination=f"{host}:{port}",
    )


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
