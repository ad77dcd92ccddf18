# tests/test_transitions.py

from uonum.context.tokenizer import BOS, EOS, Token, clean_tokens
from uonum.core.transitions import build_links


def toks(*pairs):
    return [Token(s, [c]) for s, c in pairs]


def test_clean_tokens_drops_sentinels_and_single_spaces():
    seq = [BOS, Token("犬", ["名詞"]), Token(" ", ["空白"]), Token("  ", ["空白"]), EOS]
    out = clean_tokens(seq)
    assert [t.surface for t in out] == ["犬", "  "]


def test_fewer_than_two_tokens_gives_nothing():
    assert build_links([]) == {}
    assert build_links(toks(("犬", "名詞"))) == {}


def test_consecutive_pairs_become_edges():
    links = build_links(toks(("犬", "名詞"), ("が", "助詞"), ("走る", "動詞"), ("。", "記号")))
    assert set(links) == {"犬_名詞", "が_助詞", "走る_動詞", "。_記号"}
    assert links["犬_名詞"].links == {"が_助詞": 1}
    assert links["が_助詞"].links == {"走る_動詞": 1}
    assert links["走る_動詞"].links == {"。_記号": 1}
    assert links["。_記号"].links == {}


def test_repeated_words_share_one_node():
    links = build_links(toks(("犬", "名詞"), ("と", "助詞"), ("犬", "名詞"), ("と", "助詞"), ("猫", "名詞")))
    assert links["犬_名詞"].links == {"と_助詞": 2}
    assert links["と_助詞"].links == {"犬_名詞": 1, "猫_名詞": 1}


def test_self_loop_accumulates():
    links = build_links(toks(("ワン", "感動詞"), ("ワン", "感動詞"), ("ワン", "感動詞")))
    assert links["ワン_感動詞"].links == {"ワン_感動詞": 2}


def test_first_seen_features_win():
    seq = [Token("犬", ["名詞", "一般"]), Token("犬", ["名詞", "固有名詞"]), Token("。", ["記号"])]
    links = build_links(seq)
    assert links["犬_名詞"].features == ["名詞", "一般"]
    assert links["犬_名詞"].links == {"犬_名詞": 1, "。_記号": 1}
