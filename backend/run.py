from app import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server so table displays get live updates in dev
    socketio.run(app, debug=True)
