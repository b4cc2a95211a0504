import pytest

from webblocks.framework import ExtendedList, ExtendedWebElement, WebPage, find_by
from webblocks.framework.context import (
    CONVERTER_KEY,
    DRIVER_KEY,
    FILTER_KEY,
    Context,
    Store,
)
from webblocks.framework.exceptions import MissingDependencyError
from webblocks.framework.registry import ExtensionRegistry
from webblocks.framework.waiter import WaitConfig


class CatalogPage(WebPage):

    @find_by("//ul/li")
    def products(self) -> ExtendedList[ExtendedWebElement]: ...


@pytest.fixture
def root():
    return Context.new_page_context(
        CatalogPage, driver="driver-handle", wait_config=WaitConfig(timeout=2.0)
    )


class TestStore:

    def test_put_get_contains(self):
        store = Store()
        store.put("token", "abc")

        assert store.get("token") == "abc"
        assert "token" in store
        assert store.contains("token")
        assert store.get("missing", "default") == "default"

    def test_append_accumulates_in_write_order(self):
        store = Store()
        first, second = (lambda x: x), (lambda x: x)
        store.append(FILTER_KEY, first)
        store.append(FILTER_KEY, second)

        assert store.get_list(FILTER_KEY) == [first, second]
        assert store.get_list(CONVERTER_KEY) == []

    def test_get_list_returns_a_copy(self):
        store = Store()
        store.append(FILTER_KEY, bool)
        store.get_list(FILTER_KEY).append(str)

        assert store.get_list(FILTER_KEY) == [bool]

    def test_list_keys_cannot_be_overwritten(self):
        store = Store()
        with pytest.raises(TypeError, match="list key"):
            store.put(FILTER_KEY, bool)

    def test_plain_keys_cannot_be_appended_to(self):
        store = Store()
        with pytest.raises(TypeError, match="not a list key"):
            store.append(DRIVER_KEY, "driver")


class TestContextTree:

    def test_root_holds_driver_and_has_no_parent(self, root):
        assert root.parent is None
        assert root.selector is None
        assert root.name == "CatalogPage"
        assert root.driver == "driver-handle"
        assert root.registry is ExtensionRegistry.create(CatalogPage)

    def test_child_copies_driver_only(self, root):
        root.store.put("session", "s-1")
        child = root.new_child("products", "//ul/li", ExtendedList)

        assert child.parent is root
        assert child.driver == "driver-handle"
        assert child.store.keys() == [DRIVER_KEY]
        assert child.registry is ExtensionRegistry.create(ExtendedList)

    def test_child_is_not_a_live_view_of_the_parent(self, root):
        child = root.new_child("products", "//ul/li", ExtendedList)
        root.store.put(DRIVER_KEY, "replacement")
        root.store.append(FILTER_KEY, bool)

        assert child.driver == "driver-handle"
        assert child.store.get_list(FILTER_KEY) == []

    def test_child_inherits_wait_config_unless_overridden(self, root):
        inherited = root.new_child("a", "//a", ExtendedWebElement)
        overridden = root.new_child("b", "//b", ExtendedWebElement, timeout=9)

        assert inherited.wait_config is root.wait_config
        assert overridden.wait_config.timeout == 9.0
        assert overridden.wait_config.polling_interval == root.wait_config.polling_interval

    def test_require_raises_when_entry_is_absent(self, root):
        orphan = Context(
            "orphan", "//x", ExtensionRegistry.create(ExtendedWebElement), WaitConfig()
        )

        assert root.require(DRIVER_KEY) == "driver-handle"
        with pytest.raises(MissingDependencyError, match="driver is missing"):
            orphan.require(DRIVER_KEY)

    def test_string_form(self, root):
        child = root.new_child("products", "//ul/li", ExtendedList)

        assert str(child) == "{name: products, selector: //ul/li}"
        assert str(root) == "{name: CatalogPage, selector: None}"
