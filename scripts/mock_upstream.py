#!/usr/bin/env python3
"""
Mock upstream API for trying DeskBridge by hand.

Point the bridge at it by saving settings with api_url=http://localhost:8080.
Endpoints:
- GET    /api/v1/nodes          - JSON list of nodes
- POST   /api/v1/nodes          - echoes the created node
- PUT    /api/v1/nodes/{id}     - echoes the updated node
- DELETE /api/v1/nodes/{id}     - 200 with an empty body
- GET    /api/v1/broken         - 500 with a plain-text body
- GET    /api/v1/files/download - binary payload
- POST   /api/v1/files/upload   - reports the received file

Run with: python scripts/mock_upstream.py
Listens on: http://localhost:8080
"""
from __future__ import annotations

from datetime import datetime

import uvicorn
from fastapi import FastAPI, File, Request, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse, Response

app = FastAPI(title="Mock Upstream API", description="Test server for DeskBridge")

NODES = [
    {"id": "node-1", "name": "alpha", "status": "online"},
    {"id": "node-2", "name": "beta", "status": "offline"},
]


def log_request(request: Request, note: str = ""):
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {request.method:<6} {request.url.path} {note}")


@app.get("/api/v1/nodes")
async def list_nodes(request: Request):
    log_request(request)
    return {"nodes": NODES}


@app.post("/api/v1/nodes")
async def create_node(request: Request):
    data = await request.json()
    log_request(request, f"name={data.get('name', '?')}")
    return JSONResponse({"node": {"id": "node-3", **data}}, status_code=201)


@app.put("/api/v1/nodes/{node_id}")
async def update_node(node_id: str, request: Request):
    data = await request.json()
    log_request(request)
    return {"node": {"id": node_id, **data}}


@app.delete("/api/v1/nodes/{node_id}")
async def delete_node(node_id: str, request: Request):
    log_request(request)
    return Response(status_code=200)


@app.get("/api/v1/broken")
async def broken(request: Request):
    log_request(request)
    return PlainTextResponse("database unavailable", status_code=500)


@app.get("/api/v1/files/download")
async def download(request: Request):
    log_request(request)
    return Response(content=bytes(range(256)), media_type="application/octet-stream")


@app.post("/api/v1/files/upload")
async def upload(request: Request, file: UploadFile = File(...)):
    content = await file.read()
    log_request(request, f"file={file.filename} ({len(content)} bytes)")
    return {"success": True, "filename": file.filename, "size": len(content)}


@app.get("/health")
async def health():
    return {"status": "healthy", "server": "mock-upstream"}


if __name__ == "__main__":
    print("\nMock Upstream API")
    print("=" * 50)
    print("Listening on http://localhost:8080")
    print("=" * 50 + "\n")

    uvicorn.run(app, host="127.0.0.1", port=8080, log_level="warning")
