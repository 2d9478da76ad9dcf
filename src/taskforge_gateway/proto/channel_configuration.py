# Function code and execution payloads/outputs are sent inline in gRPC messages
# so the default 4 MB limit is too small.
MAX_GRPC_MESSAGE_LENGTH = 100 * 1024 * 1024

GRPC_CHANNEL_OPTIONS = [
    ("grpc.max_receive_message_length", MAX_GRPC_MESSAGE_LENGTH),
    ("grpc.max_send_message_length", MAX_GRPC_MESSAGE_LENGTH),
    # Keep the single shared connection alive while the gateway is idle.
    ("grpc.keepalive_time_ms", 30_000),
    ("grpc.keepalive_timeout_ms", 10_000),
]
