"""Predefined tables, their field lists and the complex queries over them."""

from __future__ import annotations

from typing import Union

from mmoffline.table_handlers import TableHandler, TableName

CLIENT_FIELDS: tuple[str, ...] = ("id", "name")

PRODUCT_FIELDS: tuple[str, ...] = (
    "id",
    "name",
    "price",
    "measure",
    "groupId",
    "clientIds",
)

DOCUMENT_FIELDS: tuple[str, ...] = (
    "documentId",
    "dateWhenCreated",
    "shippingDate",
    "clientId",
    "clientName",
    "warehouseId",
    "warehouseName",
    "documentType",
    "documentTypeName",
    "alreadyPaid",
)

DOCUMENT_ENTRY_FIELDS: tuple[str, ...] = (
    "parentDocId",
    "entryId",
    "productId",
    "productName",
    "price",
    "measure",
    "quantity",
    "option1",
    "option2",
    "option3",
    "comment",
)

GROUP_FIELDS: tuple[str, ...] = ("name", "id", "parent_id")

NAMED_ID_FIELDS: tuple[str, ...] = ("name", "id")

PREDEFINED_DB_NAMES: tuple[str, ...] = (
    "Clients",
    "Products",
    "Groups",
    "NamedIds",
    "Documents",
    "Entries",
)

PREDEFINED_TABLES_QUANTITY = len(TableName)

PREDEFINED_TABLES: tuple[TableHandler, ...] = (
    TableHandler(
        PREDEFINED_DB_NAMES[TableName.CLIENTS],
        "( id INTEGER PRIMARY KEY NOT NULL, name TEXT )",
        CLIENT_FIELDS,
        0,
    ),
    TableHandler(
        PREDEFINED_DB_NAMES[TableName.PRODUCTS],
        "( id INTEGER PRIMARY KEY NOT NULL, name TEXT, price number,"
        " measure number,"
        "groupId INTEGER, "
        "clientIds TEXT )",
        PRODUCT_FIELDS,
        0,
    ),
    TableHandler(
        PREDEFINED_DB_NAMES[TableName.GROUPS],
        "( name TEXT, id INTEGER PRIMARY KEY NOT NULL, parent_id INTEGER )",
        GROUP_FIELDS,
        1,
    ),
    TableHandler(
        PREDEFINED_DB_NAMES[TableName.NAMED_IDS],
        "( name TEXT, id INTEGER PRIMARY KEY NOT NULL)",
        NAMED_ID_FIELDS,
        1,
    ),
    TableHandler(
        PREDEFINED_DB_NAMES[TableName.DOCUMENTS],
        "( documentId INTEGER PRIMARY KEY NOT NULL, dateWhenCreated TEXT, shippingDate TEXT, "
        "clientId INTEGER, clientName TEXT,"
        " warehouseId INTEGER, warehouseName TEXT, documentType number, documentTypeName TEXT, "
        "alreadyPaid NUMBER )",
        DOCUMENT_FIELDS,
        0,
    ),
    TableHandler(
        PREDEFINED_DB_NAMES[TableName.DOCUMENT_ENTRIES],
        "( parentDocId INTEGER, entryId INTEGER PRIMARY KEY NOT NULL, productId INTEGER, "
        "productName TEXT,"
        "price number, measure INTEGER, quantity number, option1 INTEGER, option2 INTEGER, "
        "option3 INTEGER, comment TEXT )",
        DOCUMENT_ENTRY_FIELDS,
        1,
    ),
)

# Quantity of products ordered by client %1 within group %2.
PRODUCT_QUANTITY_LINKING = (
    "select DISTINCT a.productid, ifnull(a.quantity,0) quantity from ( select c.id cod_client, "
    "g.id cod_group, p.id productid "
    ", (select sum(e.quantity) from Entries e, Documents d where d.clientId = c.id and "
    "e.parentDocId = d.documentId  "
    "and e.productId = p.id) quantity  "
    "from Clients c, Products p, Groups g where c.id = %1 and g.id = %2 and g.id = p.groupId "
    "and p.clientIds like '%'||c.id||'%') a"
)

# Number of documents bound to each client.
CLIENT_QUANTITY_LINKING = (
    "select c.id cod_client, (select count(documentId) from Documents d "
    "where c.id = d.clientId) cnt from Clients c;"
)

# All groups whose bottom-most descendants contain products.
TRUNCATE_GROUPS_WITHOUT_PRODUCTS = (
    "with recursive "
    "subgroup(n,s) as ( "
    "select id, id id_list from groups where parent_id = 0 "
    "union "
    "select id, subgroup.s ||','||id id_list from groups, subgroup "
    "where groups.parent_id = subgroup.n "
    ") "
    "select g.name,  g.id, g.parent_id "
    "from subgroup sg, groups g "
    "where sg.n = g.id "
    "and exists (select null from products p, subgroup sg2, clients c "
    "where p.groupId = sg2.n "
    "and sg2.s like '%'||sg.s||'%' "
    "and p.clientIds like '%'||c.id||'%') "
)


def predefined_table(table: Union[TableName, int]) -> TableHandler:
    """Return the handler of a predefined table by its number."""
    return PREDEFINED_TABLES[TableName(table)]


def product_quantity_query(client_id: int, group_id: int) -> str:
    """Return the product quantity query bound to a client and a group."""
    return PRODUCT_QUANTITY_LINKING.replace("%1", str(int(client_id))).replace(
        "%2", str(int(group_id))
    )