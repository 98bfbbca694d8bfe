import pytest

from mmoffline.client import ClientEntity
from mmoffline.models import (
    DataCountingDataModel,
    DataEntityFilterModel,
    DataEntityListModel,
    index_of_entity_by_id,
    upcast_entities,
)
from mmoffline.named_id import NamedIdEntity


@pytest.fixture
def clients():
    return [ClientEntity(1, "Alpha"), ClientEntity(2, "Beta"), ClientEntity(3, "Gamma")]


def test_index_of_entity_by_id(clients):
    assert index_of_entity_by_id(2, clients) == 1
    assert index_of_entity_by_id(99, clients) == -1


def test_upcast_entities_keeps_matching_class(clients):
    mixed = clients + [NamedIdEntity("kg", 1)]
    assert upcast_entities(mixed, NamedIdEntity) == [NamedIdEntity("kg", 1)]
    assert upcast_entities(mixed, ClientEntity) == clients


def test_list_model_data_and_copy(clients):
    model = DataEntityListModel(clients)
    assert model.row_count() == 3
    assert model.data(0) is clients[0]
    copied = model.data(0, copy=True)
    assert copied == clients[0] and copied is not clients[0]
    assert model.data(3) is None
    assert model.data(-1) is None


def test_list_model_set_data_and_reset(clients):
    model = DataEntityListModel()
    model.set_data(clients)
    assert model.row_count() == len(clients)
    model.reset()
    assert model.row_count() == 0


def test_remove_at(clients):
    model = DataEntityListModel(clients)
    model.remove_at(1)
    assert [c.id for c in model.entities] == [1, 3]
    model.remove_at(10)
    assert model.row_count() == 2


def test_remove_entity_by_identity_of_item(clients):
    model = DataEntityListModel(clients)
    model.remove_entity(ClientEntity(3, "other name"))
    assert [c.id for c in model.entities] == [1, 2]
    model.remove_entity(NamedIdEntity("x", 1))
    assert model.row_count() == 2


def test_replace_entity(clients):
    model = DataEntityListModel(clients)
    replacement = ClientEntity(2, "Renamed")
    model.replace_entity(replacement)
    assert model.data(1) is replacement
    assert model.row_count() == 3


def test_click_reports_entity(clients):
    seen = []
    model = DataEntityListModel(clients, on_entity_clicked=seen.append)
    assert model.click(2) is clients[2]
    assert model.click(7) is None
    assert seen == [clients[2]]


def test_filter_model_rows_and_click(clients):
    seen = []
    source = DataEntityListModel(clients)
    view = DataEntityFilterModel(source, on_entity_clicked=seen.append)
    assert view.rows() == clients
    view.set_pattern("GAM")
    assert view.rows() == [clients[2]]
    assert view.click(0) is clients[2]
    assert view.click(1) is None
    assert seen == [clients[2]]


def test_filter_model_follows_source(clients):
    source = DataEntityListModel(clients)
    view = DataEntityFilterModel(source, pattern="a")
    before = len(view.rows())
    source.remove_at(0)
    assert len(view.rows()) == before - 1


def test_counting_model_empty_counters(clients):
    model = DataCountingDataModel(clients)
    model.assign_empty_counters(5)
    assert [model.quantity(row) for row in range(3)] == [5, 5, 5]
    assert model.quantity(3) is None


def test_counting_model_updates_only_known_ids(clients):
    model = DataCountingDataModel(clients)
    model.assign_quantity_info({1: 4, 2: 0})
    assert model.assign_quantity_update(clients[1], 7) is True
    assert model.assign_quantity_update(3, 1) is False
    assert model.quantity(1) == 7
    assert model.quantity(2) == 0


def test_increment_quantity(clients):
    model = DataCountingDataModel(clients)
    model.assign_quantity_info({1: 4})
    assert model.increment_quantity(1, 3) is True
    assert model.quantity(0) == 7
    assert model.increment_quantity(2, 3) is False
    assert 2 not in model.quantities


def test_assign_quantity_info_copies(clients):
    source = {1: 1}
    model = DataCountingDataModel(clients)
    model.assign_quantity_info(source)
    source[1] = 100
    assert model.quantity(0) == 1