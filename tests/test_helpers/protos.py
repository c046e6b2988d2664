"""Builders for protobuf descriptor messages used in tests."""

from __future__ import annotations

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

ORDERS_PROTO = "orders/v1/orders.proto"
COMMON_PROTO = "common/v1/money.proto"


def common_file() -> descriptor_pb2.FileDescriptorProto:
    """Return a dependency file defining ``common.v1.Money``."""
    proto = descriptor_pb2.FileDescriptorProto(
        name=COMMON_PROTO,
        package="common.v1",
        syntax="proto3",
    )
    proto.message_type.add(name="Money")
    proto.options.go_package = "example.com/common/v1;commonv1"
    return proto


def orders_file(*, go_package: str | None = "example.com/orders/v1;ordersv1") -> descriptor_pb2.FileDescriptorProto:
    """Return ``orders.proto`` with ``OrderService`` and ``OrderCache``.

    ``OrderCache`` carries leading comments on the service and its
    ``get_order`` method, and ``price_quote`` returns a nested message.
    """
    proto = descriptor_pb2.FileDescriptorProto(
        name=ORDERS_PROTO,
        package="orders.v1",
        syntax="proto3",
        dependency=[COMMON_PROTO],
    )
    proto.message_type.add(name="GetOrderRequest")
    proto.message_type.add(name="Order")
    quote = proto.message_type.add(name="Quote")
    quote.nested_type.add(name="Line")
    if go_package is not None:
        proto.options.go_package = go_package

    plain = proto.service.add(name="OrderService")
    plain.method.add(
        name="GetOrder",
        input_type=".orders.v1.GetOrderRequest",
        output_type=".orders.v1.Order",
    )
    cache = proto.service.add(name="OrderCache")
    cache.method.add(
        name="get_order",
        input_type=".orders.v1.GetOrderRequest",
        output_type=".orders.v1.Order",
    )
    cache.method.add(
        name="PriceQuote",
        input_type=".common.v1.Money",
        output_type=".orders.v1.Quote.Line",
    )

    service_location = proto.source_code_info.location.add(path=[6, 1])
    service_location.leading_comments = " OrderCache caches order lookups.\n"
    method_location = proto.source_code_info.location.add(path=[6, 1, 2, 0])
    method_location.leading_comments = " Fetches an order by id.\n"
    return proto


def code_generator_request(
    *,
    parameter: str = "",
    files_to_generate: tuple[str, ...] = (ORDERS_PROTO,),
    orders: descriptor_pb2.FileDescriptorProto | None = None,
) -> plugin_pb2.CodeGeneratorRequest:
    """Return a request for ``orders.proto`` with its dependency."""
    request = plugin_pb2.CodeGeneratorRequest(
        file_to_generate=list(files_to_generate),
        parameter=parameter,
    )
    request.proto_file.append(common_file())
    request.proto_file.append(orders if orders is not None else orders_file())
    request.compiler_version.major = 5
    request.compiler_version.minor = 28
    request.compiler_version.patch = 1
    return request


def descriptor_set() -> descriptor_pb2.FileDescriptorSet:
    """Return a descriptor set holding the dependency and ``orders.proto``."""
    return descriptor_pb2.FileDescriptorSet(file=[common_file(), orders_file()])
