# Gunicorn configuration: gunicorn -c gunicorn.conf.py "app:create_app()"
from config import Config

bind = '0.0.0.0:5001'
workers = int(Config.GUNICORN_WORKERS)
timeout = int(Config.GUNICORN_TIMEOUT)


def post_fork(server, worker):
    server.log.info(f'[gunicorn] Worker forked: pid={worker.pid}')
