import os
import socket
import sys
import threading

from flask import Flask, render_template, request
from flask_socketio import SocketIO, emit

from frame_driver import FrameDriver, FramePacer
from session import AlwaysRunning, IntervalTicker, Session
from settings import Settings
from simulation import Simulation

app = Flask(__name__)
app.config['SECRET_KEY'] = 'pong-secret-key'
app.config['PONG_SETTINGS'] = Settings()
# Tests switch this off and tick the games by hand
app.config['RUN_GAME_LOOPS'] = True

# Use threading mode instead of eventlet (more compatible, works everywhere)
socketio = SocketIO(app, cors_allowed_origins="*", async_mode='threading')

# Game instances (one per client)
games = {}


def create_game(client_id, settings):
    """Build the simulation and frame driver for one browser client"""
    session = Session(ticker=IntervalTicker(1.0)) if settings.gated else AlwaysRunning()

    def play_cue(kind):
        socketio.emit('cue', {'kind': kind.value}, to=client_id)

    simulation = Simulation(settings, session=session, play_cue=play_cue)
    game_data = {
        'simulation': simulation,
        'running': True,
        'last_clock': None,
    }

    def render(snapshot):
        socketio.emit('game_state', snapshot.to_dict(), to=client_id)
        if snapshot.elapsed != game_data['last_clock']:
            game_data['last_clock'] = snapshot.elapsed
            socketio.emit('clock', {'elapsed': snapshot.elapsed}, to=client_id)

    game_data['driver'] = FrameDriver(simulation, render)
    return game_data


def field_info(settings):
    return {
        'width': settings.field_width,
        'height': settings.field_height,
        'gated': settings.gated,
    }


@app.route('/')
def index():
    return render_template('index.html')


@socketio.on('connect')
def handle_connect():
    client_id = request.sid
    print(f"Client connected: {client_id}")
    settings = app.config['PONG_SETTINGS']
    games[client_id] = create_game(client_id, settings)
    emit('connected', {'message': 'Connected to Pong server', 'field': field_info(settings)})

    if app.config['RUN_GAME_LOOPS']:
        thread = threading.Thread(target=game_loop, args=(client_id,))
        thread.daemon = True
        thread.start()


@socketio.on('disconnect')
def handle_disconnect(*args):
    client_id = request.sid
    print(f"Client disconnected: {client_id}")
    game_data = games.pop(client_id, None)
    if game_data is not None:
        game_data['running'] = False
        ticker = getattr(game_data['simulation'].session, 'ticker', None)
        if ticker is not None:
            ticker.stop()


@socketio.on('start_game')
def handle_start_game():
    """Start (or keep running) the game for this client"""
    client_id = request.sid
    game_data = games.get(client_id)
    if game_data is None:
        return
    print(f"Starting game for client: {client_id}")
    game_data['driver'].submit(game_data['simulation'].start)


@socketio.on('restart_game')
def handle_restart_game():
    client_id = request.sid
    game_data = games.get(client_id)
    if game_data is None:
        return
    print(f"Resetting game for client: {client_id}")
    game_data['driver'].submit(game_data['simulation'].restart)


@socketio.on('pointer_move')
def handle_pointer_move(data):
    """Pointer y in field coordinates; applied at the next frame"""
    game_data = games.get(request.sid)
    if game_data is None:
        return

    try:
        y = float(data.get('y'))
    except (AttributeError, TypeError, ValueError):
        return
    game_data['driver'].submit(game_data['simulation'].report_pointer_y, y)


def game_loop(client_id):
    """Frame loop running in a background thread, one tick per frame"""
    game_data = games.get(client_id)
    if game_data is None:
        return

    driver = game_data['driver']
    pacer = FramePacer(game_data['simulation'].settings.fps)
    try:
        driver.run(lambda: game_data['running'], pacer)
    except Exception as e:
        print(f"Error in game loop for {client_id}: {e}")
        socketio.emit('error', {'message': str(e)}, to=client_id)


def find_free_port(start_port, attempts=10):
    """First port from start_port upward that can be bound, or None"""
    for port in range(start_port, start_port + attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(('', port))
                return port
        except OSError:
            continue
    return None


def main():
    try:
        app.config['PONG_SETTINGS'] = Settings.from_env()
    except ValueError as e:
        print(f"Error: invalid PONG_* setting: {e}")
        sys.exit(1)

    base_port = int(os.environ.get('PORT', 5000))
    port = find_free_port(base_port)
    if port is None:
        print(f"Error: no free port between {base_port} and {base_port + 9}")
        sys.exit(1)
    if port != base_port:
        print(f"Port {base_port} is busy, serving on {port}")

    print(f"Pong server listening on http://localhost:{port}")
    socketio.run(app, host='0.0.0.0', port=port, debug=False, allow_unsafe_werkzeug=True)


if __name__ == '__main__':
    main()
