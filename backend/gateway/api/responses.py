"""Response Shaping — turns adapter results into HTTP responses."""

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from gateway.services.rest_forwarder import ForwardedResponse
from gateway.services.soap_adapter import SoapResult


def soap_response(result: SoapResult) -> Response:
    """Raw text results pass through; everything else is JSON."""
    if result.is_text:
        text = result.payload
        media_type = "application/xml" if text.lstrip().startswith("<") else "text/plain"
        return Response(content=text, media_type=media_type)
    return JSONResponse(content=jsonable_encoder(result.payload))


def passthrough_response(forwarded: ForwardedResponse) -> Response:
    """Upstream body, unmodified, as a 200."""
    return Response(
        content=forwarded.content,
        media_type=forwarded.media_type or "application/json",
    )
