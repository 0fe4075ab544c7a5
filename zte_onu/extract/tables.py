"""
zte_onu.extract.tables
=======================
Reduces the status pages' two-column tables to key/value dictionaries,
and reads ``<select>`` option lists, using BeautifulSoup.

A status table looks like::

    <div class="space_0"><table>
      <tr><td>模式</td><td><input class="uiNoBorder" value="PPPoE" readonly></td></tr>
      <tr><td>IP</td><td>100.64.1.2</td></tr>
    </table></div>

The first cell of each row is the key and the second the value.  A cell
whose first child is an ``<input>`` contributes that input's ``value``.
"""

from bs4 import BeautifulSoup, NavigableString, Tag

_BS4_PARSER = "lxml"


def _first_child(cell: Tag):
    for child in cell.children:
        if isinstance(child, NavigableString) and not child.strip():
            continue
        return child
    return None


def cell_text(cell: Tag | None) -> str:
    """Text of a table cell, preferring an embedded input's value."""
    if cell is None:
        return ""
    child = _first_child(cell)
    if isinstance(child, Tag) and child.name == "input":
        return child.get("value") or ""
    return cell.get_text().strip()


def extract_key_value_tables(
    body: str,
    container_tag: str,
    container_class: str,
    row_tag: str = "tr",
    cell_tag: str = "td",
) -> list[dict[str, str]]:
    """
    Return one dict per ``<container_tag class="container_class">`` in *body*.

    Rows with fewer than two cells yield ``""`` for the missing parts.
    When a key repeats inside one container the first row wins.
    """
    soup = BeautifulSoup(body, _BS4_PARSER)
    tables: list[dict[str, str]] = []
    for container in soup.find_all(container_tag, class_=container_class):
        kv: dict[str, str] = {}
        for row in container.find_all(row_tag):
            cells = row.find_all(cell_tag)
            key = cell_text(cells[0] if len(cells) > 0 else None)
            value = cell_text(cells[1] if len(cells) > 1 else None)
            kv.setdefault(key, value)
        tables.append(kv)
    return tables


def extract_select_options(body: str, select_id: str) -> list[dict[str, str]]:
    """
    Return the attributes of every ``<option>`` under ``<select id=select_id>``,
    plus its visible text under the ``"text"`` key.  Missing select -> ``[]``.
    """
    soup = BeautifulSoup(body, _BS4_PARSER)
    select = soup.find("select", id=select_id)
    if select is None:
        return []
    options = []
    for option in select.find_all("option"):
        attrs = {k: (" ".join(v) if isinstance(v, list) else v)
                 for k, v in option.attrs.items()}
        attrs["text"] = option.get_text().strip()
        options.append(attrs)
    return options
