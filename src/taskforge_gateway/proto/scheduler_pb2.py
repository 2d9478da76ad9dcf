"""Scheduler service messages.

Mirrors scheduler.proto. The file descriptor is assembled with the protobuf runtime
so the gateway doesn't need a protoc code generation step.
"""

from typing import Any

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE: str = "scheduler"
SERVICE_NAME: str = f"{PACKAGE}.SchedulerService"

_FieldDescriptorProto = descriptor_pb2.FieldDescriptorProto

# (field name, field number, field type, has presence)
_MESSAGES: dict[str, list[tuple[str, int, int, bool]]] = {
    "RegisterFunctionRequest": [
        ("name", 1, _FieldDescriptorProto.TYPE_STRING, False),
        ("language", 2, _FieldDescriptorProto.TYPE_STRING, False),
        ("code", 3, _FieldDescriptorProto.TYPE_BYTES, False),
    ],
    "RegisterFunctionResponse": [
        ("function_id", 1, _FieldDescriptorProto.TYPE_STRING, False),
    ],
    "TriggerExecutionRequest": [
        ("function_id", 1, _FieldDescriptorProto.TYPE_STRING, False),
        ("payload", 2, _FieldDescriptorProto.TYPE_BYTES, False),
    ],
    "TriggerExecutionResponse": [
        ("execution_id", 1, _FieldDescriptorProto.TYPE_STRING, False),
        ("status", 2, _FieldDescriptorProto.TYPE_STRING, False),
    ],
    "GetExecutionStatusRequest": [
        ("execution_id", 1, _FieldDescriptorProto.TYPE_STRING, False),
    ],
    "GetExecutionStatusResponse": [
        ("status", 1, _FieldDescriptorProto.TYPE_STRING, False),
        ("output", 2, _FieldDescriptorProto.TYPE_BYTES, True),
        ("error", 3, _FieldDescriptorProto.TYPE_STRING, True),
    ],
}

# (method name, request message, response message)
METHODS: list[tuple[str, str, str]] = [
    ("RegisterFunction", "RegisterFunctionRequest", "RegisterFunctionResponse"),
    ("TriggerExecution", "TriggerExecutionRequest", "TriggerExecutionResponse"),
    (
        "GetExecutionStatus",
        "GetExecutionStatusRequest",
        "GetExecutionStatusResponse",
    ),
]


def _file_descriptor_proto() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="taskforge_gateway/proto/scheduler.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    for message_name, fields in _MESSAGES.items():
        message_proto = file_proto.message_type.add(name=message_name)
        for field_name, number, field_type, has_presence in fields:
            field_proto = message_proto.field.add(
                name=field_name,
                number=number,
                type=field_type,
                label=_FieldDescriptorProto.LABEL_OPTIONAL,
                json_name=field_name,
            )
            if has_presence:
                # proto3 "optional" fields are modelled as synthetic oneofs
                # which must be declared after all real oneofs.
                field_proto.proto3_optional = True
                field_proto.oneof_index = len(message_proto.oneof_decl)
                message_proto.oneof_decl.add(name=f"_{field_name}")

    service_proto = file_proto.service.add(name="SchedulerService")
    for method_name, request_name, response_name in METHODS:
        service_proto.method.add(
            name=method_name,
            input_type=f".{PACKAGE}.{request_name}",
            output_type=f".{PACKAGE}.{response_name}",
        )
    return file_proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_file_descriptor_proto().SerializeToString())


def _message_class(message_name: str) -> Any:
    return message_factory.GetMessageClass(
        _POOL.FindMessageTypeByName(f"{PACKAGE}.{message_name}")
    )


def method_path(method_name: str) -> str:
    """Returns the full gRPC method path, i.e. /scheduler.SchedulerService/RegisterFunction."""
    return f"/{SERVICE_NAME}/{method_name}"


MESSAGE_CLASSES: dict[str, Any] = {
    message_name: _message_class(message_name) for message_name in _MESSAGES
}

RegisterFunctionRequest = MESSAGE_CLASSES["RegisterFunctionRequest"]
RegisterFunctionResponse = MESSAGE_CLASSES["RegisterFunctionResponse"]
TriggerExecutionRequest = MESSAGE_CLASSES["TriggerExecutionRequest"]
TriggerExecutionResponse = MESSAGE_CLASSES["TriggerExecutionResponse"]
GetExecutionStatusRequest = MESSAGE_CLASSES["GetExecutionStatusRequest"]
GetExecutionStatusResponse = MESSAGE_CLASSES["GetExecutionStatusResponse"]
