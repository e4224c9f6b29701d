from dataclasses import dataclass

import orjson
import pytest
from pydantic import BaseModel

from courier.common.strlst import StrLst, stringify


class Item(BaseModel):
    name: str
    count: int
    active: bool


@dataclass
class Point:
    x: int
    y: int


class Pairs:
    def to_pairs(self):
        return [('b', 2), ('a', 1)]


class TestStrLst:
    def test_keeps_insertion_order_and_duplicates(self):
        lst = StrLst().add('tag', 'a').add('other', 'x').add('tag', 'b')

        assert lst.to_pairs() == [('tag', 'a'), ('other', 'x'), ('tag', 'b')]
        assert lst.get('tag') == 'a'
        assert lst.get_all('tag') == ['a', 'b']
        assert lst.get('missing', 'default') == 'default'
        assert len(lst) == 3

    def test_append_merges_other_sources(self):
        lst = StrLst([('a', '1')])
        lst.append(StrLst([('b', '2')]))
        lst.append({'c': 3})
        lst.append([('d', None)])

        assert lst.keys() == ['a', 'b', 'c', 'd']
        assert lst.values() == ['1', '2', '3', None]

    def test_clone_is_independent(self):
        original = StrLst([('a', '1')])
        copy = original.clone()
        copy.add('b', '2')
        original.clear()

        assert len(original) == 0
        assert copy.to_pairs() == [('a', '1'), ('b', '2')]

    def test_rejects_non_string_keys(self):
        with pytest.raises(TypeError):
            StrLst().add(1, 'x')

    def test_to_pairs_renders_none_as_empty(self):
        assert StrLst([('a', None)]).to_pairs() == [('a', '')]

    def test_json_round_trip(self):
        lst = StrLst([('name', 'x'), ('empty', None)])

        assert lst.to_json() == '{"name":"x","empty":null}'
        assert StrLst.from_json(lst.to_json()) == lst

    def test_to_json_indented(self):
        assert StrLst([('a', '1')]).to_json(indent=True) == '{\n  "a": "1"\n}'

    def test_json_last_duplicate_wins(self):
        assert orjson.loads(StrLst([('a', '1'), ('a', '2')]).to_json()) == {'a': '2'}

    def test_from_json_requires_object(self):
        with pytest.raises(ValueError, match='Expected a JSON object'):
            StrLst.from_json('[1, 2]')

    @pytest.mark.parametrize('source,expected', [
        ({'a': 1, 'b': 'x'}, [('a', '1'), ('b', 'x')]),
        (Item(name='n', count=2, active=True), [('name', 'n'), ('count', '2'), ('active', 'true')]),
        (Point(x=1, y=2), [('x', '1'), ('y', '2')]),
        (Pairs(), [('b', '2'), ('a', '1')]),
        ([('k', 'v')], [('k', 'v')]),
    ])
    def test_from_object(self, source, expected):
        assert StrLst.from_object(source).to_pairs() == expected

    def test_from_object_rejects_plain_objects(self):
        with pytest.raises(TypeError, match='Cannot convert object'):
            StrLst.from_object(object())

    def test_from_object_rejects_strings(self):
        with pytest.raises(TypeError):
            StrLst.from_object('a=1')


@pytest.mark.parametrize('value,expected', [
    ('text', 'text'),
    (None, None),
    (True, 'true'),
    (False, 'false'),
    (12, '12'),
    (1.5, '1.5'),
    ({'nested': [1, 2]}, '{"nested":[1,2]}'),
])
def test_stringify(value, expected):
    assert stringify(value) == expected
