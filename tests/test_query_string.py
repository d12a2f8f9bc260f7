from urllib.parse import quote, quote_plus

import pytest

from rookweb.query_string import QueryString, decode


def test_get_simple_value():
    qs = QueryString("/params?foo=bar&pew=32")
    assert qs.get("foo") == "bar"
    assert qs.get("pew") == "32"


def test_get_missing_key_returns_none():
    qs = QueryString("/params?foo=bar")
    assert qs.get("missing") is None


def test_prefix_of_key_does_not_match():
    qs = QueryString("/p?foobar=1")
    assert qs.get("foo") is None


def test_value_round_trip_through_percent_encoding():
    value = "hello world & more/ü=?#"
    qs = QueryString("/p?k=" + quote_plus(value))
    assert qs.get("k") == value


def test_utf8_escapes_decode_to_text():
    value = "héllo"
    qs = QueryString("/p?name=" + quote(value))
    assert qs.get("name") == value


def test_malformed_escape_truncates_value():
    qs = QueryString("/p?k=ab%zzcd")
    assert qs.get("k") == "ab"


def test_blank_value_reads_as_empty_string():
    qs = QueryString("/p?flag&x=1")
    assert qs.get("flag") == ""
    assert qs.get("x") == "1"


def test_encoded_key_matches_plain_name():
    qs = QueryString("/p?a%62=1")
    assert qs.get("ab") == "1"


def test_get_returns_first_occurrence():
    qs = QueryString("/p?k=first&k=second")
    assert qs.get("k") == "first"
    assert qs.get_list("k", use_brackets=False) == ["first", "second"]


def test_fragment_is_not_part_of_value():
    qs = QueryString("/p?a=1#frag")
    assert qs.get("a") == "1"


def test_url_without_query_has_no_pairs():
    qs = QueryString("/just/a/path")
    assert qs.keys() == []
    assert qs.get("path") is None


def test_empty_input_has_no_pairs():
    assert QueryString().keys() == []
    assert QueryString("").get("a") is None


def test_non_url_mode_parses_whole_string():
    qs = QueryString("a=1&b=2", url=False)
    assert qs.keys() == ["a", "b"]
    assert qs.get("b") == "2"


def test_bytes_input_matches_text_input():
    text = "/p?a=1&b=x+y"
    assert QueryString(text.encode()).keys() == QueryString(text).keys()
    assert QueryString(text.encode()).get("b") == QueryString(text).get("b")


def test_get_list_with_brackets():
    qs = QueryString("/params?count[]=a&count[]=b")
    assert qs.get_list("count") == ["a", "b"]


def test_get_list_missing_is_empty():
    qs = QueryString("/params?x=1")
    assert qs.get_list("count") == []


def test_pop_removes_first_pair():
    qs = QueryString("/p?a=1&b=2")
    assert qs.pop("a") == "1"
    assert qs.get("a") is None
    assert qs.keys() == ["b"]


def test_pop_missing_leaves_pairs():
    qs = QueryString("/p?a=1&b=2")
    assert qs.pop("c") is None
    assert qs.keys() == ["a", "b"]


def test_pop_list_removes_all_matching():
    qs = QueryString("/p?count[]=a&x=1&count[]=b")
    assert qs.pop_list("count") == ["a", "b"]
    assert qs.get_list("count") == []
    assert qs.keys() == ["x"]


def test_pop_list_without_brackets():
    qs = QueryString("/p?c=1&d=0&c=2")
    assert qs.pop_list("c", use_brackets=False) == ["1", "2"]
    assert qs.keys() == ["d"]


def test_get_dict():
    qs = QueryString("/params?mydict[a]=b&mydict[abcd]=42")
    assert qs.get_dict("mydict") == {"a": "b", "abcd": "42"}


def test_get_dict_keeps_first_value_of_repeated_key():
    qs = QueryString("/p?d[k]=1&d[k]=2")
    assert qs.get_dict("d") == {"k": "1"}


def test_pop_dict_removes_entries():
    qs = QueryString("/p?mydict[a]=b&other=1&mydict[c]=d")
    assert qs.pop_dict("mydict") == {"a": "b", "c": "d"}
    assert qs.get_dict("mydict") == {}
    assert qs.keys() == ["other"]


def test_keys_in_order():
    qs = QueryString("/p?z=1&a=2&m")
    assert qs.keys() == ["z", "a", "m"]


def test_clear_removes_everything():
    qs = QueryString("/p?a=1&b=2")
    qs.clear()
    assert qs.keys() == []
    assert qs.get("a") is None


def test_str_lists_pairs():
    qs = QueryString("/p?a=1&b=2")
    assert str(qs) == "[ a=1, b=2 ]"


def test_str_of_empty_query():
    assert str(QueryString()) == "[  ]"


def test_pair_count_is_capped():
    query = "&".join(f"k{n}=v" for n in range(300))
    qs = QueryString("/p?" + query)
    assert len(qs.keys()) == QueryString.MAX_KEY_VALUE_PAIRS_COUNT
    assert len(qs) == QueryString.MAX_KEY_VALUE_PAIRS_COUNT


@pytest.mark.parametrize("value", ["plain", "with space", "a&b=c", "100%", "ü+ß"])
def test_decode_round_trip(value):
    assert decode(quote_plus(value)) == value


def test_decode_stops_at_separator():
    assert decode("abc&def") == "abc"
    assert decode("abc=def") == "abc"