"""Tests for Go source templates."""

from __future__ import annotations

from cachegen.config import RuntimeBinding
from cachegen.descriptors import Comments
from cachegen.templates import (
    file_header,
    getter_comment,
    getter_method,
    import_line,
    manager_constructor,
    manager_struct,
    refresher_comment,
    refresher_method,
    strip_comment_markers,
)
from tests.test_helpers.descriptors import method, service

RUNTIME = RuntimeBinding()
ORDER = service("OrderCache", (("GetOrder", "OrderReq", "OrderResp"),))


def test_struct_declares_one_handle_per_method() -> None:
    """The manager struct holds a typed cache handle field per method."""
    text = manager_struct(ORDER, RUNTIME)
    assert text == (
        "\n"
        "type OrderCacheManager struct {\n"
        "\torderCacheManager_GetOrder *gocachemanager.CacheManager[*OrderReq, *OrderResp]\n"
        "}\n"
    )


def test_struct_comment_references_manager() -> None:
    """A service comment is prefixed with a line naming the manager."""
    commented = service("OrderCache", comment=" Orders.\n Second line.\n")
    text = manager_struct(commented, RUNTIME)
    assert text.startswith(
        "\n// OrderCacheManager for every operation related to this service:\n"
        "// Orders.\n// Second line.\ntype OrderCacheManager struct {\n"
    )


def test_constructor_signature_and_body() -> None:
    """The constructor takes an update function per method plus options."""
    text = manager_constructor(ORDER, RUNTIME)
    assert "func NewOrderCacheManager(\n" in text
    assert (
        "\tupdateGetOrderFn func(context.Context, *OrderReq) (*OrderResp, error),\n"
        "\toptions ...gocachemanager.CacheOption,\n"
        ") (*OrderCacheManager, error) {\n"
    ) in text
    assert (
        "\torderCacheManager_GetOrder, err := "
        "gocachemanager.NewCacheManager[*OrderReq, *OrderResp](\n"
        '\t\t"getorder",\n'
        "\t\tfunc() *OrderResp { return &OrderResp{} },\n"
        "\t\tupdateGetOrderFn,\n"
        "\t\toptions...,\n"
        "\t)\n"
        "\tif err != nil {\n"
        '\t\treturn nil, fmt.Errorf("creating cache manager %s: %w", "GetOrder", err)\n'
        "\t}\n"
    ) in text
    assert text.endswith(
        "\treturn &OrderCacheManager{\n"
        "\t\torderCacheManager_GetOrder: orderCacheManager_GetOrder,\n"
        "\t}, nil\n"
        "}\n"
    )


def test_constructor_checks_each_error_before_next_build() -> None:
    """Every handle build is followed by its own error check, in order."""
    two = service("PairCache", (("A", "AReq", "AResp"), ("B", "BReq", "BResp")))
    text = manager_constructor(two, RUNTIME)
    build_a = text.index("pairCacheManager_A, err :=")
    check_a = text.index('"A", err)')
    build_b = text.index("pairCacheManager_B, err :=")
    check_b = text.index('"B", err)')
    assert build_a < check_a < build_b < check_b < text.index("return &PairCacheManager{")


def test_composite_literal_is_aligned() -> None:
    """Key/value pairs are aligned like gofmt output."""
    two = service("PairCache", (("A", "AReq", "AResp"), ("Long", "LReq", "LResp")))
    text = manager_constructor(two, RUNTIME)
    assert "\t\tpairCacheManager_A:    pairCacheManager_A,\n" in text
    assert "\t\tpairCacheManager_Long: pairCacheManager_Long,\n" in text


def test_zero_method_service() -> None:
    """A service without methods still yields a type and a constructor."""
    empty = service("Cache")
    assert manager_struct(empty, RUNTIME) == "\ntype CacheManager struct {\n}\n"
    assert manager_constructor(empty, RUNTIME) == (
        "\n"
        "func NewCacheManager(\n"
        "\toptions ...gocachemanager.CacheOption,\n"
        ") (*CacheManager, error) {\n"
        "\treturn &CacheManager{}, nil\n"
        "}\n"
    )


def test_getter_delegates_to_fetch() -> None:
    """``Get<Method>`` only delegates to the handle's fetch operation."""
    text = getter_method(ORDER.methods[0], RUNTIME)
    assert text == (
        "\n"
        "func (cm *OrderCacheManager) GetGetOrder(\n"
        "\tctx context.Context,\n"
        "\tinput *OrderReq,\n"
        ") (*OrderResp, error) {\n"
        "\treturn cm.orderCacheManager_GetOrder.Get(ctx, input)\n"
        "}\n"
    )


def test_refresher_delegates_to_refresh() -> None:
    """``Refresh<Method>`` only delegates to the handle's refresh operation."""
    text = refresher_method(ORDER.methods[0], RUNTIME)
    assert "func (cm *OrderCacheManager) RefreshGetOrder(\n" in text
    assert "\treturn cm.orderCacheManager_GetOrder.Refresh(ctx, input)\n" in text


def test_method_comments() -> None:
    """Get comments prefix ``Get``; Refresh comments keep the original text."""
    commented = method(
        "GetOrder",
        "OrderReq",
        "OrderResp",
        service="OrderCache",
        comment=" Fetches an order.  \n\n See https://example.com.\n",
    )
    assert getter_comment(commented) == [
        "// GetFetches an order.",
        "//",
        "// See https://example.com.",
    ]
    assert refresher_comment(commented) == [
        "// Eagerly refresh the cache for the method that:",
        "// Fetches an order.  ",
        "//",
        "// See https://example.com.",
    ]


def test_uncommented_method_has_no_comment() -> None:
    """No doc comment is emitted without a leading comment."""
    bare = ORDER.methods[0]
    assert getter_comment(bare) == []
    assert refresher_comment(bare) == []


def test_strip_comment_markers() -> None:
    """Only the leading marker and trailing whitespace are removed."""
    assert strip_comment_markers(Comments(leading=" a // b \n")) == ["a // b"]


def test_import_line_aliases_mismatched_package() -> None:
    """The runtime import is aliased when its path base differs."""
    assert import_line(RUNTIME) == '"github.com/NSXBet/go-cache-manager/pkg/gocachemanager"'
    custom = RuntimeBinding(import_path="example.com/cache/v2", package="cache")
    assert import_line(custom) == 'cache "example.com/cache/v2"'


def test_file_header() -> None:
    """The header carries the marker, package clause and fixed imports."""
    assert file_header("orders.proto", "ordersv1", RUNTIME) == (
        "// Code generated by protoc-gen-go-cache-manager. DO NOT EDIT.\n"
        "// source: orders.proto\n"
        "\n"
        "package ordersv1\n"
        "\n"
        "import (\n"
        '\t"context"\n'
        '\t"fmt"\n'
        "\n"
        '\t"github.com/NSXBet/go-cache-manager/pkg/gocachemanager"\n'
        ")\n"
    )
