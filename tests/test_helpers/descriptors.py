"""Builders for generator descriptors used in tests."""

from __future__ import annotations

from cachegen.descriptors import Comments, FileDescriptor, MethodDescriptor, ServiceDescriptor

ORDER_PROTO = "orders/v1/orders.proto"
ORDER_PREFIX = "example.com/orders/v1/orders"


def method(
    name: str,
    input_type: str,
    output_type: str,
    *,
    service: str,
    comment: str = "",
) -> MethodDescriptor:
    """Return a method descriptor owned by ``service``."""
    return MethodDescriptor(
        name=name,
        input_type=input_type,
        output_type=output_type,
        service_name=service,
        comments=Comments(leading=comment),
    )


def service(
    name: str,
    methods: tuple[tuple[str, str, str], ...] = (),
    *,
    comment: str = "",
) -> ServiceDescriptor:
    """Return a service whose methods are ``(name, input, output)`` triples."""
    return ServiceDescriptor(
        name=name,
        methods=tuple(method(*spec, service=name) for spec in methods),
        comments=Comments(leading=comment),
    )


def order_cache_service() -> ServiceDescriptor:
    """Return ``OrderCache`` with a commented and an uncommented method."""
    return ServiceDescriptor(
        name="OrderCache",
        comments=Comments(leading=" OrderCache caches order lookups.\n"),
        methods=(
            method(
                "GetOrder",
                "GetOrderRequest",
                "Order",
                service="OrderCache",
                comment=" Fetches an order by id.\n",
            ),
            method("ListOrders", "ListOrdersRequest", "ListOrdersResponse", service="OrderCache"),
        ),
    )


def file_with(
    *services: ServiceDescriptor,
    path: str = ORDER_PROTO,
    prefix: str = ORDER_PREFIX,
    generate: bool = True,
) -> FileDescriptor:
    """Return a Go package ``ordersv1`` file holding ``services``."""
    return FileDescriptor(
        path=path,
        package_name="ordersv1",
        import_path="example.com/orders/v1",
        filename_prefix=prefix,
        generate=generate,
        services=services,
    )


def order_cache_file() -> FileDescriptor:
    """Return the orders file with ``OrderService`` and ``OrderCache``."""
    plain = service("OrderService", (("GetOrder", "GetOrderRequest", "Order"),))
    return file_with(plain, order_cache_service())
