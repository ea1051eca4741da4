import json

import pytest

from asset_pipeline.session.context import SessionContext

# 1x1 transparent PNG.
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


@pytest.fixture()
def png_data_uri() -> str:
    """A complete, decodable PNG data URI."""
    return f"data:image/png;base64,{PNG_BASE64}"


@pytest.fixture()
def session() -> SessionContext:
    return SessionContext(session_id="sess-1")


@pytest.fixture()
def seeded_session(png_data_uri: str) -> SessionContext:
    """Session with item 1 in every session tier and item 2 only in memory."""
    return SessionContext(
        session_id="sess-2",
        session_storage={
            "cartImage_full_1": json.dumps({"printImage": png_data_uri}),
            "cartImage_1": json.dumps({"displayImage": "data:image/jpeg;base64,AAAA"}),
        },
        memory_images={"2": {"originalImage": png_data_uri}},
    )
