# send_bytes.py
import socket
import sys
import argparse

parser = argparse.ArgumentParser(description="Send bytes to a PortSink listener, then close.")
parser.add_argument("--host", default="127.0.0.1", help="Listener host (default: 127.0.0.1)")
parser.add_argument("--port", type=int, required=True, help="Listener port")
parser.add_argument("messages", nargs="*", help="Messages sent as separate writes (stdin if none)")
args = parser.parse_args()

with socket.create_connection((args.host, args.port), timeout=5) as client_socket:
    print(f"[+] Connected to {args.host}:{args.port}", file=sys.stderr)
    if args.messages:
        for msg in args.messages:
            client_socket.sendall(msg.encode())
    else:
        for chunk in iter(lambda: sys.stdin.buffer.read(4096), b""):
            client_socket.sendall(chunk)

print("[-] Closed.", file=sys.stderr)
