import json

import pytest

from tsp_solver import InvalidInputError, load_cities, parse_cities, parse_route


def test_parses_mappings_and_pairs():
    cities = parse_cities([{"x": 1, "y": 2, "name": "A"}, (3.5, 4), [5, 6, "C"]])
    assert [(c.x, c.y, c.id, c.name) for c in cities] == [(1.0, 2.0, 0, "A"), (3.5, 4.0, 1, None), (5.0, 6.0, 2, "C")]


@pytest.mark.parametrize("raw, message", [
    ("not a list", "Cities must be provided as an array"),
    ([{"x": 0, "y": 0}, {"x": "1", "y": 0}], "City at index 1 must have numeric x and y coordinates"),
    ([{"x": 0, "y": 0}, {"x": float("nan"), "y": 0}], "City at index 1 must have numeric"),
    ([{"x": 0, "y": 0}, {"x": True, "y": 0}], "City at index 1 must have numeric"),
    ([{"x": 0, "y": 0}, 7], "City at index 1 must be an object"),
    ([{"x": 0, "y": 0}], "At least 2 cities are required"),
    ([{"x": 0, "y": 0}, {"x": 1, "y": 1, "name": 5}], "non-string name"),
])
def test_rejects_malformed_cities(raw, message):
    with pytest.raises(InvalidInputError, match=message):
        parse_cities(raw)


def test_parse_route():
    assert parse_route([2, 0, 1], 3) == [2, 0, 1]
    with pytest.raises(InvalidInputError, match="Invalid city index 3 in route"):
        parse_route([0, 3], 3)
    with pytest.raises(InvalidInputError, match="Invalid city index -1"):
        parse_route([-1], 3)
    with pytest.raises(InvalidInputError, match="not an integer"):
        parse_route([0, 1.5], 3)
    with pytest.raises(InvalidInputError, match="at least one"):
        parse_route([], 3)
    with pytest.raises(InvalidInputError, match="array"):
        parse_route("0,1", 3)


def test_load_csv_with_header_and_names(tmp_path):
    path = tmp_path / "cities.csv"
    path.write_text("x,y,name\n0,0,Home\n3,4,Shop\n\n6,0,Park\n")
    cities = load_cities(str(path), require_names=True)
    assert [c.name for c in cities] == ["Home", "Shop", "Park"]
    assert cities[1].x == 3.0


def test_load_csv_bad_row(tmp_path):
    path = tmp_path / "cities.csv"
    path.write_text("0,0\n1,oops\n")
    with pytest.raises(InvalidInputError, match=":2:"):
        load_cities(str(path))


def test_load_json(tmp_path):
    path = tmp_path / "cities.json"
    path.write_text(json.dumps({"cities": [{"x": 0, "y": 0}, {"x": 1, "y": 1}]}))
    cities = load_cities(str(path))
    assert len(cities) == 2
