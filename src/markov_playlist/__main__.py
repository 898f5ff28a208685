"""Entry point for running the playlist API as a module."""
from markov_playlist.api import app
from markov_playlist.config import load_local_env_file
import uvicorn
import os

if __name__ == "__main__":
    load_local_env_file()
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
