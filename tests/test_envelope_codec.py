"""
Tests for encoding envelopes into commit messages and decoding them back.
"""

from __future__ import annotations

import logging

import pytest

from changeinfo import __version__
from changeinfo.changes import (
    CommentChangeInfo,
    OptionChangeInfo,
    PluginChangeInfo,
    PostChangeInfo,
    PostMetaChangeInfo,
    RevertChangeInfo,
    ThemeChangeInfo,
    UserChangeInfo,
    WordPressUpdateChangeInfo,
)
from changeinfo.commit_message import CommitMessage
from changeinfo.envelope import ChangeInfoEnvelope
from changeinfo.errors import ChangeInfoParseError, MalformedEnvelopeError, UnroutableFragmentError
from changeinfo.matcher import ChangeInfoMatcher


# -----------------------------------------------------------------------------
# Encoding
# -----------------------------------------------------------------------------


def test_encode_wire_format(core_update_bundle):
    subject, body = ChangeInfoEnvelope(core_update_bundle, "4.2.0").encode()

    assert subject == "WordPress updated to version 4.2"
    assert body == (
        "VP-Action: wordpress/update/4.2"
        "\n\n"
        "VP-Action: plugin/update/akismet/akismet.php\n"
        "VP-Plugin-Name: Akismet"
        "\n\n"
        "VP-Action: option/edit/db_version"
        "\n\n"
        "VP-Action: option/edit/WPLANG"
        "\n\n"
        "X-VP-Version: 4.2.0"
    )


def test_encode_defaults_to_own_version(post_created):
    _, body = ChangeInfoEnvelope([post_created]).encode()
    assert body.split("\n\n")[-1] == f"X-VP-Version: {__version__}"


def test_encode_without_version_omits_trailer(post_created):
    _, body = ChangeInfoEnvelope([post_created], None).encode()
    assert body == post_created.to_fragment()


def test_commit_message_matches_encode(post_created, post_updated):
    envelope = ChangeInfoEnvelope([post_updated, post_created], "4.2.0")
    message = envelope.commit_message()
    assert (message.subject, message.body) == envelope.encode()
    assert message.subject == "Post 'Hello World' created"


# -----------------------------------------------------------------------------
# Round trip
# -----------------------------------------------------------------------------


def test_round_trip_keeps_records_and_version():
    changes = [
        OptionChangeInfo(action="edit", entity_id="WPLANG"),
        ThemeChangeInfo(action="activate", stylesheet="twentyfourteen"),
        PostChangeInfo(action="update", entity_id="7", post_title="About", post_type="page"),
        CommentChangeInfo(action="create", entity_id="C1", comment_author="ann", post_title="About"),
        UserChangeInfo(action="edit", entity_id="U1", user_login="admin"),
        ThemeChangeInfo(action="switch", stylesheet="twentyfifteen", theme_name="Twenty Fifteen"),
        PostMetaChangeInfo(action="create", entity_id="M1", meta_key="_edit_lock", post_vpid="P7"),
        RevertChangeInfo(action="undo", commit_hash="0123456789abcdef"),
    ]
    envelope = ChangeInfoEnvelope(changes, "4.2.0")
    decoded = ChangeInfoEnvelope.decode(*envelope.encode())

    assert decoded.version == "4.2.0"
    # The body is written in ranked order, so decoding yields the ranked view.
    assert list(decoded.change_infos) == envelope.sorted_change_infos()
    assert sorted(decoded.change_infos, key=repr) == sorted(changes, key=repr)
    assert decoded.sorted_change_infos() == envelope.sorted_change_infos()
    assert decoded == ChangeInfoEnvelope(envelope.sorted_change_infos(), "4.2.0")


def test_round_trip_of_already_ranked_records_is_exact(post_created, post_updated):
    envelope = ChangeInfoEnvelope([post_created, post_updated], "4.2.0")
    assert ChangeInfoEnvelope.decode(*envelope.encode()) == envelope


def test_version_marker_round_trip(post_created):
    subject, body = ChangeInfoEnvelope([post_created], "4.2.0").encode()
    assert body.split("\n\n")[-1] == "X-VP-Version: 4.2.0"

    decoded = ChangeInfoEnvelope.decode(subject, body)
    assert decoded.version == "4.2.0"
    assert decoded.change_infos == (post_created,)


def test_round_trip_keeps_untrimmed_values():
    changes = [
        PostChangeInfo(action="create", entity_id="P1", post_title="  Hello World ", post_type="post"),
        UserChangeInfo(action="edit", entity_id="U1", user_login="admin "),
    ]
    envelope = ChangeInfoEnvelope(changes, "4.2.0")
    assert ChangeInfoEnvelope.decode(*envelope.encode()) == envelope


def test_from_commit_message(post_created):
    raw = "Whatever the subject says\n\n" + post_created.to_fragment() + "\n\nX-VP-Version: 3.0\n"
    decoded = ChangeInfoEnvelope.from_commit_message(CommitMessage.from_text(raw))
    assert decoded.change_infos == (post_created,)
    assert decoded.version == "3.0"


# -----------------------------------------------------------------------------
# Decoding edge cases
# -----------------------------------------------------------------------------


def test_missing_version_is_tolerated():
    body = "VP-Action: option/edit/blogname\n\nVP-Action: option/edit/siteurl"
    decoded = ChangeInfoEnvelope.decode("Option 'blogname' edited", body)
    assert decoded.version is None
    assert [c.entity_id for c in decoded.change_infos] == ["blogname", "siteurl"]


def test_decode_keeps_body_order():
    body = "VP-Action: option/edit/WPLANG\n\nVP-Action: wordpress/update/4.2\n\nX-VP-Version: 4.2.0"
    decoded = ChangeInfoEnvelope.decode("", body)
    assert [c.category for c in decoded.change_infos] == ["option", "wordpress_update"]
    assert [c.category for c in decoded.sorted_change_infos()] == ["wordpress_update", "option"]


def test_subject_is_not_validated():
    body = "VP-Action: plugin/activate/hello.php\n\nX-VP-Version: 4.2.0"
    decoded = ChangeInfoEnvelope.decode("Something unrelated", body)
    assert decoded.description() == "Plugin 'hello.php' activated"


def test_malformed_version_marker_means_no_version(caplog):
    body = "VP-Action: option/edit/blogname\n\nX-VP-Version 4.2.0"
    with caplog.at_level(logging.WARNING, logger="changeinfo.envelope"):
        decoded = ChangeInfoEnvelope.decode("", body)
    assert decoded.version is None
    assert decoded.change_infos == (OptionChangeInfo(action="edit", entity_id="blogname"),)
    assert "malformed version trailer" in caplog.text


def test_version_trailer_followed_by_git_trailers():
    body = "VP-Action: option/edit/blogname\n\nX-VP-Version: 4.2.0\nSigned-off-by: A <a@b>"
    decoded = ChangeInfoEnvelope.decode("", body)
    assert decoded.version == "4.2.0"
    assert decoded.change_infos == (OptionChangeInfo(action="edit", entity_id="blogname"),)


def test_decode_normalizes_crlf():
    body = (
        "VP-Action: post/create/P1\r\nVP-Post-Title: Hello\r\n"
        "\r\n"
        "VP-Action: option/edit/blogname\r\n"
        "\r\n"
        "X-VP-Version: 4.2.0\r\n"
    )
    decoded = ChangeInfoEnvelope.decode("", body)
    assert decoded.version == "4.2.0"
    assert decoded.change_infos == (
        PostChangeInfo(action="create", entity_id="P1", post_title="Hello"),
        OptionChangeInfo(action="edit", entity_id="blogname"),
    )


def test_version_tag_elsewhere_is_not_a_marker():
    body = "X-VP-Version: 1.0\n\nVP-Action: option/edit/blogname"
    with pytest.raises(UnroutableFragmentError) as excinfo:
        ChangeInfoEnvelope.decode("", body)
    assert excinfo.value.index == 0


@pytest.mark.parametrize("body", ["", "\n\n", "   "])
def test_empty_body_is_malformed(body):
    with pytest.raises(MalformedEnvelopeError):
        ChangeInfoEnvelope.decode("subject", body)


def test_body_with_only_version_is_malformed():
    with pytest.raises(MalformedEnvelopeError, match="no change info"):
        ChangeInfoEnvelope.decode("subject", "X-VP-Version: 4.2.0")


def test_unroutable_fragment_reports_position():
    body = (
        "VP-Action: option/edit/blogname"
        "\n\n"
        "Some text a human added"
        "\n\n"
        "X-VP-Version: 4.2.0"
    )
    with pytest.raises(UnroutableFragmentError) as excinfo:
        ChangeInfoEnvelope.decode("", body)
    assert excinfo.value.index == 1
    assert excinfo.value.fragment == "Some text a human added"
    assert isinstance(excinfo.value, MalformedEnvelopeError)


def test_parse_failure_after_routing_propagates():
    matcher = ChangeInfoMatcher(types=())
    matcher.register(r"post/.*", PostChangeInfo)
    matcher.register(r"option/.*", PostChangeInfo)
    body = "VP-Action: post/create/P1\n\nVP-Action: option/edit/blogname"
    with pytest.raises(ChangeInfoParseError) as excinfo:
        ChangeInfoEnvelope.decode("", body, matcher=matcher)
    assert excinfo.value.index == 1
    assert excinfo.value.fragment == "VP-Action: option/edit/blogname"
    assert "at index 1" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ChangeInfoParseError)


def test_decode_with_injected_priority_order():
    body = "VP-Action: wordpress/update/4.2\n\nVP-Action: plugin/update/hello.php"
    decoded = ChangeInfoEnvelope.decode("", body, priority_order=["plugin", "wordpress_update"])
    assert decoded.description() == "Plugin 'hello.php' updated"
    assert decoded.sorted_change_infos()[1] == WordPressUpdateChangeInfo(version="4.2")
    assert isinstance(decoded.sorted_change_infos()[0], PluginChangeInfo)
