"""Tests for SurfacedTermPublisher (Observer pattern implementation)."""

import pytest
from unittest.mock import Mock

from termspotter.display.SurfacedTermPublisher import SurfacedTermPublisher
from termspotter.types import SurfacedTerm


@pytest.fixture
def publisher():
    return SurfacedTermPublisher(verbose=False)


@pytest.fixture
def sample_term():
    return SurfacedTerm(
        display_term="Eigenvalue",
        definition="A scalar by which an eigenvector is scaled.",
        matched_text="eigenvalue",
        surfaced_at=1.0,
    )


# Subscription Management Tests

def test_subscribe_adds_subscriber(publisher, subscriber):
    assert publisher.subscriber_count() == 0

    publisher.subscribe(subscriber)

    assert publisher.subscriber_count() == 1


def test_unsubscribe_removes_subscriber(publisher, subscriber):
    publisher.subscribe(subscriber)
    publisher.unsubscribe(subscriber)

    assert publisher.subscriber_count() == 0


def test_duplicate_subscribe_ignored(publisher, subscriber):
    publisher.subscribe(subscriber)
    publisher.subscribe(subscriber)

    assert publisher.subscriber_count() == 1


def test_unsubscribe_nonexistent_subscriber_safe(publisher, subscriber):
    publisher.unsubscribe(subscriber)

    assert publisher.subscriber_count() == 0


# Notification Tests

def test_publish_term_surfaced_notifies_all(publisher, sample_term):
    subscribers = [Mock(), Mock(), Mock()]
    for sub in subscribers:
        publisher.subscribe(sub)

    publisher.publish_term_surfaced(sample_term)

    for sub in subscribers:
        sub.on_term_surfaced.assert_called_once_with(sample_term)


def test_publish_display_cleared_notifies_all(publisher):
    subscribers = [Mock(), Mock()]
    for sub in subscribers:
        publisher.subscribe(sub)

    publisher.publish_display_cleared()

    for sub in subscribers:
        sub.on_display_cleared.assert_called_once_with()


def test_publish_after_unsubscribe_skips_unsubscribed(publisher, sample_term):
    sub1 = Mock()
    sub2 = Mock()
    publisher.subscribe(sub1)
    publisher.subscribe(sub2)

    publisher.unsubscribe(sub1)
    publisher.publish_term_surfaced(sample_term)

    sub1.on_term_surfaced.assert_not_called()
    sub2.on_term_surfaced.assert_called_once_with(sample_term)


# Error Isolation Tests

def test_subscriber_exception_isolation(publisher, sample_term, caplog):
    sub1 = Mock()
    sub2 = Mock()
    sub2.on_term_surfaced.side_effect = RuntimeError("Subscriber failed!")
    sub3 = Mock()
    for sub in (sub1, sub2, sub3):
        publisher.subscribe(sub)

    publisher.publish_term_surfaced(sample_term)

    sub1.on_term_surfaced.assert_called_once_with(sample_term)
    sub3.on_term_surfaced.assert_called_once_with(sample_term)
    assert "failed on_term_surfaced" in caplog.text


def test_display_cleared_exception_isolation(publisher, caplog):
    sub1 = Mock()
    sub1.on_display_cleared.side_effect = ValueError("Bad state!")
    sub2 = Mock()
    publisher.subscribe(sub1)
    publisher.subscribe(sub2)

    publisher.publish_display_cleared()

    sub2.on_display_cleared.assert_called_once_with()
    assert "failed on_display_cleared" in caplog.text


def test_publish_returns_delivered_count(publisher, sample_term):
    healthy = Mock()
    broken = Mock()
    broken.on_term_surfaced.side_effect = RuntimeError("offline")
    publisher.subscribe(healthy)
    publisher.subscribe(broken)

    assert publisher.publish_term_surfaced(sample_term) == 1
    assert publisher.publish_display_cleared() == 2


def test_surface_can_unsubscribe_during_callback(publisher, sample_term):
    surface = Mock()
    surface.on_term_surfaced.side_effect = lambda term: publisher.unsubscribe(surface)
    publisher.subscribe(surface)

    publisher.publish_term_surfaced(sample_term)
    publisher.publish_term_surfaced(sample_term)

    surface.on_term_surfaced.assert_called_once_with(sample_term)
    assert publisher.subscriber_count() == 0
