# config.py
"""
Configuration for PortSink.
"""

PROJECT_NAME = "PortSink"
VERSION = "0.1.0"

BIND_HOST = "0.0.0.0"
DEFAULT_PORT = 9000
# read by the CLI at parse time, validated like --port
PORT_ENV_VAR = "PORTSINK_PORT"

# one pending connection is enough, only one is ever accepted
LISTEN_BACKLOG = 1
RECV_BUFFER_SIZE = 4096
