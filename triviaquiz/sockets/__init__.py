from .scoreboard_events import register_scoreboard_events

def register_sockets(socketio):
    register_scoreboard_events(socketio)
