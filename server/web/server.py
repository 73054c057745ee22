"""FastAPI server with WebSocket for the tic-tac-toe game."""

import json
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse, FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from tictactoe.config import GameConfig, configure_logging
from tictactoe.session import GameSession

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages WebSocket connections."""

    def __init__(self):
        self.active_connections: list[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

    async def broadcast(self, message: dict):
        """Broadcast message to all connected clients."""
        dead = []
        for connection in self.active_connections:
            try:
                await connection.send_json(message)
            except Exception:
                logger.debug("Dropping dead WebSocket connection", exc_info=True)
                dead.append(connection)
        for conn in dead:
            self.disconnect(conn)


class PlaceRequest(BaseModel):
    """Request body for placing the current player's mark."""
    row: int
    col: int
    mark: Optional[str] = None


def create_app(config: Optional[GameConfig] = None) -> FastAPI:
    app = FastAPI(title="Tic-Tac-Toe")
    manager = ConnectionManager()

    # One session per app, replaced in place on restart
    session = GameSession(config)

    def build_state_message() -> dict:
        return {"type": "state", **session.to_dict()}

    async def apply_action(action: dict) -> dict:
        result = session.submit_action(action)
        if not result["success"]:
            logger.info("Rejected %s: %s", action.get("type"), result["message"])
            return {"status": "error", "message": result["message"]}

        await manager.broadcast({"type": "action", "action": action, "result": result})
        await manager.broadcast(build_state_message())
        return {"status": "ok", "result": result, "state": session.game_state.to_dict()}

    # Static files
    client_path = Path(__file__).parent.parent.parent / "client"
    if client_path.exists():
        app.mount("/static", StaticFiles(directory=str(client_path)), name="static")

    @app.get("/")
    async def get_index():
        """Serve the main page."""
        index_path = client_path / "index.html"
        if index_path.exists():
            return FileResponse(index_path)
        return HTMLResponse("<h1>Tic-Tac-Toe</h1><p>Client not found</p>")

    # ==================== Game Creation ====================

    @app.post("/api/new-game")
    async def new_game():
        """Start a fresh game with an empty history."""
        game_state = session.restart()
        await manager.broadcast({"type": "new_game", "state": game_state.to_dict()})
        return {"status": "ok", "state": game_state.to_dict()}

    # ==================== Player Actions ====================

    @app.post("/api/place")
    async def place(request: PlaceRequest):
        """Place the current player's mark at (row, col)."""
        action = {"type": "place", "row": request.row, "col": request.col}
        if request.mark is not None:
            action["mark"] = request.mark
        response = await apply_action(action)

        if response["status"] == "ok" and response["result"]["status"] != "in_progress":
            result = response["result"]
            await manager.broadcast({
                "type": "game_over",
                "status": result["status"],
                "winner": result["winner"],
                "winner_name": result.get("winner_name"),
            })
        return response

    # ==================== History & Undo ====================

    @app.post("/api/undo")
    async def undo():
        """Undo the most recent move."""
        return await apply_action({"type": "undo"})

    @app.post("/api/redo")
    async def redo():
        """Redo the most recently undone move."""
        return await apply_action({"type": "redo"})

    @app.get("/api/history")
    async def get_history():
        """Get the operation log with the undo cursor."""
        history = session.game_state.history
        return {
            "status": "ok",
            "history": session.get_history(),
            "cursor": history.cursor,
        }

    # ==================== State ====================

    @app.get("/api/state")
    async def get_state():
        """Get current game state."""
        return {"status": "ok", **session.to_dict()}

    @app.get("/api/status")
    async def get_status():
        """Get whether the game is in progress, won or drawn."""
        return {"status": "ok", "result": session.check_status()}

    # ==================== WebSocket ====================

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        await manager.connect(websocket)
        try:
            await websocket.send_json(build_state_message())

            while True:
                data = await websocket.receive_text()
                try:
                    cmd = json.loads(data)
                except json.JSONDecodeError:
                    logger.debug("Ignoring malformed WebSocket message: %r", data)
                    continue
                if cmd.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})
        except WebSocketDisconnect:
            manager.disconnect(websocket)

    return app


if __name__ == "__main__":
    import uvicorn

    config = GameConfig.load(sys.argv[1] if len(sys.argv) > 1 else None)
    configure_logging(config.log_level)
    uvicorn.run(create_app(config), host=config.server.host, port=config.server.port)
