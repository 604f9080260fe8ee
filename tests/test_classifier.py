"""
Tests for content classification
"""

import pytest

from linkdump.classifier import ContentClassifier
from linkdump.config import ClassifierConfig
from linkdump.models import ContentType


@pytest.fixture
def classifier():
    return ContentClassifier()


class TestSocialAndVideo:
    """Host denylists always win over metadata length"""

    @pytest.mark.parametrize("url", [
        "https://twitter.com/user/status/1",
        "https://x.com/user",
        "https://www.reddit.com/r/python",
        "https://old.reddit.com/r/python",
        "https://m.facebook.com/page",
        "https://www.threads.net/@someone",
    ])
    def test_social_hosts(self, classifier, url):
        result = classifier.classify(url, "t" * 500, "d" * 500)

        assert result.type is ContentType.SOCIAL_MEDIA
        assert result.should_summarize is False

    @pytest.mark.parametrize("url", [
        "https://www.youtube.com/watch?v=abc",
        "https://youtu.be/abc",
        "https://vimeo.com/123",
        "https://www.twitch.tv/channel",
    ])
    def test_video_hosts(self, classifier, url):
        result = classifier.classify(url, "t" * 500, "d" * 500)

        assert result.type is ContentType.VIDEO
        assert result.should_summarize is False

    def test_host_match_is_case_insensitive(self, classifier):
        assert classifier.classify("https://WWW.YouTube.COM/watch").type is ContentType.VIDEO

    def test_lookalike_host_is_not_matched(self, classifier):
        result = classifier.classify("https://notyoutube.com/watch", "Short", "")
        assert result.type is ContentType.SHORT_CONTENT

    def test_linkedin_is_summarized(self, classifier):
        result = classifier.classify("https://www.linkedin.com/posts/x", "t" * 100, "d" * 100)
        assert result.type is ContentType.LONG_CONTENT


class TestLengthThreshold:
    """Test the long/short boundary"""

    def test_boundary_inclusive(self, classifier):
        result = classifier.classify("https://blog.example/a", "t" * 100, "d" * 100)

        assert result.type is ContentType.LONG_CONTENT
        assert result.should_summarize is True

    def test_just_below_boundary(self, classifier):
        result = classifier.classify("https://blog.example/a", "t" * 100, "d" * 99)

        assert result.type is ContentType.SHORT_CONTENT
        assert result.should_summarize is False

    def test_missing_metadata_counts_as_zero(self, classifier):
        result = classifier.classify("https://blog.example/a")
        assert result.type is ContentType.SHORT_CONTENT

    def test_custom_threshold(self):
        classifier = ContentClassifier(ClassifierConfig(summarize_threshold=10))
        assert classifier.classify("https://blog.example/a", "0123456789").should_summarize

    def test_custom_domains(self):
        classifier = ContentClassifier(ClassifierConfig(social_domains=["mastodon.social"]))
        result = classifier.classify("https://mastodon.social/@me", "t" * 300)
        assert result.type is ContentType.SOCIAL_MEDIA


class TestRobustness:
    """Classification never raises"""

    @pytest.mark.parametrize("url", ["", "not a url", "http://[::1", "://"])
    def test_malformed_url_falls_through_to_length(self, classifier, url):
        result = classifier.classify(url, "t" * 250)
        assert result.type is ContentType.LONG_CONTENT

    def test_deterministic(self, classifier):
        first = classifier.classify("https://blog.example/a", "title", "desc")
        second = classifier.classify("https://blog.example/a", "title", "desc")
        assert first == second

    def test_reason_is_given(self, classifier):
        assert classifier.classify("https://x.com/a").reason

    @pytest.mark.parametrize("url,expected", [
        ("https://WWW.Example.com:8080/path", "www.example.com"),
        ("http://[::1", ""),
        ("nonsense", ""),
    ])
    def test_extract_hostname(self, url, expected):
        assert ContentClassifier.extract_hostname(url) == expected
