"""
Basic Compression Example

This example demonstrates the compression middleware on a FastAPI app.

Run with:
    uvicorn examples.basic_app.main:app --reload

Then try:
    curl -s -H 'Accept-Encoding: gzip' -D - http://127.0.0.1:8000/items -o /dev/null
"""
import asyncio

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, StreamingResponse

from httpcompression import MiddlewareManager, configure_logging

configure_logging(debug=True)

# Create the application
app = FastAPI(
    title="Compression Example App",
    description="A basic example of the compression middleware",
    version="0.1.0",
)

manager = MiddlewareManager()
manager.configure_compression(threshold="1kb", level=6)
manager.apply_to_app(app)


@app.get("/")
async def root():
    """Small JSON body, sent uncompressed (below the threshold)."""
    return {"message": "Hello from the compression example"}


@app.get("/items")
async def list_items():
    """Large JSON body, compressed when the client accepts it."""
    return [{"id": i, "name": f"Item {i}", "description": "x" * 40} for i in range(200)]


@app.get("/image")
async def image():
    """Binary content is never compressed by the default filter."""
    return PlainTextResponse(b"\x89PNG" + b"\x00" * 4096, media_type="image/png")


@app.get("/events")
async def events(request: Request):
    """Server-sent events, flushed after every event."""
    async def generate():
        for i in range(10):
            yield f"data: tick {i}\n\n"
            await request.state.compression_flush()
            await asyncio.sleep(1)

    return StreamingResponse(generate(), media_type="text/event-stream")
