"""Tests for the AddressTracker facade."""

from unittest.mock import MagicMock

import pytest

from address_watch.config import TrackerConfig
from address_watch.models.address import StandardizedAddress
from address_watch.tracker import AddressTracker

CENTRO = {"street": "Rua das Flores", "house_number": "123", "neighbourhood": "Centro", "postcode": "01000-000"}
BELA_VISTA = {"street": "Avenida Paulista", "house_number": "456", "neighbourhood": "Bela Vista", "postcode": "01310-000"}
CONSOLACAO = {"street": "Rua Augusta", "house_number": "789", "neighbourhood": "Consolação", "postcode": "01305-000"}


class TestGetBrazilianStandardAddress:
    """Tests for get_brazilian_standard_address()."""

    def test_returns_standardized_address(self, tracker, make_payload) -> None:
        address = tracker.get_brazilian_standard_address(make_payload())

        assert isinstance(address, StandardizedAddress)
        assert address.bairro == "Centro"
        assert tracker.cache.size() == 1
        assert tracker.current_address == address
        assert tracker.previous_address is None

    def test_accepts_empty_payloads(self, tracker) -> None:
        assert tracker.get_brazilian_standard_address(None) == StandardizedAddress()
        assert tracker.get_brazilian_standard_address({}) == StandardizedAddress()
        assert tracker.cache.size() == 2
        assert tracker.has_bairro_changed() is False

    def test_tracks_previous_address(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))

        assert tracker.previous_address.bairro == "Centro"
        assert tracker.current_address.bairro == "Bela Vista"


class TestBairroChangeDetection:
    """Tests for neighborhood change detection through the facade."""

    def test_false_with_no_addresses(self, tracker) -> None:
        assert tracker.has_bairro_changed() is False

    def test_false_with_one_address(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        assert tracker.has_bairro_changed() is False

    def test_true_then_false(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))

        assert tracker.has_bairro_changed() is True
        assert tracker.has_bairro_changed() is False
        assert tracker.has_bairro_changed() is False

    def test_detects_new_change_after_insert(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))
        assert tracker.has_bairro_changed() is True
        assert tracker.has_bairro_changed() is False

        tracker.get_brazilian_standard_address(make_payload(**CONSOLACAO))

        assert tracker.has_bairro_changed() is True
        assert tracker.has_bairro_changed() is False

    def test_same_bairro_different_street(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(street="Rua dos Lírios", postcode="01000-001"))

        assert tracker.has_bairro_changed() is False

    def test_missing_then_present_bairro(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(neighbourhood=None))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))

        assert tracker.has_bairro_changed() is True
        assert tracker.has_bairro_changed() is False

    def test_missing_bairro_twice(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(neighbourhood=None))
        tracker.get_brazilian_standard_address(make_payload(neighbourhood=None, street="Rua B"))

        assert tracker.has_bairro_changed() is False

    def test_callback_fires_on_second_insert(self, tracker, make_payload) -> None:
        calls = []
        tracker.set_bairro_change_callback(calls.append)

        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        assert calls == []

        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))
        assert len(calls) == 1
        assert calls[0].has_changed is True
        assert calls[0].previous["bairro"] == "Centro"
        assert calls[0].current["bairro"] == "Bela Vista"

        tracker.get_brazilian_standard_address(make_payload(street="Rua Oscar Freire", neighbourhood="Bela Vista"))
        assert len(calls) == 1

    def test_poll_after_callback_insert_is_false(self, tracker, make_payload) -> None:
        """Insert-time evaluation and polling share one detector state."""
        callback = MagicMock()
        tracker.set_bairro_change_callback(callback)

        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))

        callback.assert_called_once()
        assert tracker.has_bairro_changed() is False

    def test_no_callback_does_not_raise_and_keeps_edge(self, tracker, make_payload) -> None:
        tracker.set_bairro_change_callback(None)

        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))

        assert tracker.has_bairro_changed() is True

    def test_change_details_include_bairro_completo(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(suburb="Região Central", **BELA_VISTA))

        details = tracker.get_bairro_change_details()

        assert details.has_changed is True
        assert details.previous["bairro"] == "Centro"
        assert details.current["bairro"] == "Bela Vista"
        assert details.previous["bairro_completo"] == "Centro"
        assert details.current["bairro_completo"] == "Bela Vista, Região Central"

    def test_change_details_without_history(self, tracker) -> None:
        assert tracker.get_bairro_change_details() is None


class TestIndependentDetectors:
    """Logradouro, bairro and cidade detectors keep separate state."""

    def test_both_fields_change_on_same_insert(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))

        assert tracker.has_bairro_changed() is True
        assert tracker.has_logradouro_changed() is True
        assert tracker.has_bairro_changed() is False
        assert tracker.has_logradouro_changed() is False

    def test_callback_counts_diverge(self, tracker, make_payload) -> None:
        bairro_calls, logradouro_calls = [], []
        tracker.set_bairro_change_callback(bairro_calls.append)
        tracker.set_logradouro_change_callback(logradouro_calls.append)

        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))
        assert len(bairro_calls) == 1
        assert len(logradouro_calls) == 1

        tracker.get_brazilian_standard_address(
            make_payload(street="Avenida Paulista", house_number="1000", neighbourhood="Jardim Paulista")
        )

        assert len(bairro_calls) == 2
        assert len(logradouro_calls) == 1
        assert logradouro_calls[0].previous["logradouro"] == "Rua das Flores"
        assert logradouro_calls[0].current["logradouro"] == "Avenida Paulista"
        assert bairro_calls[1].previous["bairro"] == "Bela Vista"
        assert bairro_calls[1].current["bairro"] == "Jardim Paulista"

    def test_only_changed_field_triggers(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(street="Rua Nova"))

        assert tracker.has_bairro_changed() is False
        assert tracker.has_logradouro_changed() is True
        assert tracker.has_cidade_changed() is False

    def test_cidade_change(self, tracker, make_payload) -> None:
        calls = []
        tracker.set_cidade_change_callback(calls.append)

        tracker.get_brazilian_standard_address(make_payload())
        tracker.get_brazilian_standard_address(make_payload(city="Campinas"))

        assert len(calls) == 1
        assert calls[0].previous == {"cidade": "São Paulo", "cidade_completa": "São Paulo, SP"}
        assert calls[0].current == {"cidade": "Campinas", "cidade_completa": "Campinas, SP"}
        assert tracker.has_cidade_changed() is False

    def test_callback_getters(self, tracker) -> None:
        callback = MagicMock()
        tracker.set_logradouro_change_callback(callback)

        assert tracker.get_logradouro_change_callback() is callback
        assert tracker.get_bairro_change_callback() is None
        assert tracker.get_cidade_change_callback() is None

    def test_detector_lookup(self, tracker) -> None:
        assert tracker.detector("bairro").kind == "bairro"
        with pytest.raises(KeyError):
            tracker.detector("cep")


class TestClearAndReset:
    """Tests for clear_cache() and reset_change_detection()."""

    def test_clear_cache_empties_history(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))

        tracker.clear_cache()

        assert tracker.cache.is_empty()
        assert tracker.current_address is None
        assert tracker.has_bairro_changed() is False

    def test_clear_cache_keeps_signatures(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))
        assert tracker.has_bairro_changed() is True

        tracker.clear_cache()
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))

        assert tracker.has_bairro_changed() is False

    def test_full_restart(self, tracker, make_payload) -> None:
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))
        assert tracker.has_bairro_changed() is True

        tracker.clear_cache()
        tracker.reset_change_detection()
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))

        assert tracker.has_bairro_changed() is True
        assert tracker.detector("logradouro").last_notified_signature is None


class TestTrackerConfig:
    """Tests for configured trackers."""

    def test_auto_evaluation_disabled(self, make_payload) -> None:
        tracker = AddressTracker(TrackerConfig(auto_evaluate_on_insert=False))
        callback = MagicMock()
        tracker.set_bairro_change_callback(callback)

        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))
        callback.assert_not_called()

        assert tracker.has_bairro_changed() is True
        callback.assert_called_once()

    def test_bounded_history(self, make_payload) -> None:
        tracker = AddressTracker(TrackerConfig(max_history=2))
        for payload in (CENTRO, BELA_VISTA, CONSOLACAO):
            tracker.get_brazilian_standard_address(make_payload(**payload))

        assert tracker.cache.size() == 2
        assert tracker.get_bairro_change_details().previous["bairro"] == "Bela Vista"

    def test_callback_exception_propagates_from_insert(self, tracker, make_payload) -> None:
        tracker.set_bairro_change_callback(MagicMock(side_effect=RuntimeError("display failed")))
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))

        with pytest.raises(RuntimeError, match="display failed"):
            tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))

        assert tracker.cache.size() == 2
        assert tracker.has_bairro_changed() is False

    def test_failing_callback_does_not_suppress_other_detectors(self, tracker, make_payload) -> None:
        bairro_calls = []
        tracker.set_logradouro_change_callback(MagicMock(side_effect=RuntimeError("display failed")))
        tracker.set_bairro_change_callback(bairro_calls.append)

        tracker.get_brazilian_standard_address(make_payload(street="Rua A", neighbourhood="Centro"))
        with pytest.raises(RuntimeError, match="display failed"):
            tracker.get_brazilian_standard_address(make_payload(street="Rua B", neighbourhood="Bela Vista"))
        tracker.get_brazilian_standard_address(make_payload(street="Rua B", neighbourhood="Consolação"))

        assert len(bairro_calls) == 2
        assert [c.current["bairro"] for c in bairro_calls] == ["Bela Vista", "Consolação"]

    def test_first_callback_error_is_raised(self, tracker, make_payload) -> None:
        tracker.set_logradouro_change_callback(MagicMock(side_effect=RuntimeError("first")))
        tracker.set_bairro_change_callback(MagicMock(side_effect=ValueError("second")))
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))

        with pytest.raises(RuntimeError, match="first"):
            tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))

        assert tracker.has_logradouro_changed() is False
        assert tracker.has_bairro_changed() is False


class TestSubscribers:
    """Tests for address update subscribers."""

    def test_notified_on_every_insert(self, tracker, make_payload) -> None:
        updates = []
        tracker.subscribe(updates.append)

        tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        tracker.get_brazilian_standard_address(make_payload(**CENTRO))

        assert [u.index for u in updates] == [0, 1]
        assert [u.cache_size for u in updates] == [1, 2]
        assert updates[1].address.bairro == "Centro"

    def test_cache_size_respects_bound(self, make_payload) -> None:
        tracker = AddressTracker(TrackerConfig(max_history=2))
        updates = []
        tracker.subscribe(updates.append)

        for payload in (CENTRO, BELA_VISTA, CONSOLACAO):
            tracker.get_brazilian_standard_address(make_payload(**payload))

        assert [u.cache_size for u in updates] == [1, 2, 2]
        assert updates[-1].index == 2

    def test_subscribe_twice_notifies_once(self, tracker, make_payload) -> None:
        subscriber = MagicMock()
        tracker.subscribe(subscriber)
        tracker.subscribe(subscriber)

        tracker.get_brazilian_standard_address(make_payload())

        subscriber.assert_called_once()

    def test_unsubscribe(self, tracker, make_payload) -> None:
        subscriber = MagicMock()
        tracker.subscribe(subscriber)

        assert tracker.unsubscribe(subscriber) is True
        assert tracker.unsubscribe(subscriber) is False
        tracker.get_brazilian_standard_address(make_payload())

        subscriber.assert_not_called()

    def test_rejects_non_callable(self, tracker) -> None:
        with pytest.raises(TypeError):
            tracker.subscribe("not callable")  # type: ignore[arg-type]

    def test_notified_with_auto_evaluation_disabled(self, make_payload) -> None:
        tracker = AddressTracker(TrackerConfig(auto_evaluate_on_insert=False))
        subscriber = MagicMock()
        tracker.subscribe(subscriber)

        tracker.get_brazilian_standard_address(make_payload())

        subscriber.assert_called_once()

    def test_failing_subscriber_does_not_block_callbacks(self, tracker, make_payload) -> None:
        bairro_calls = []
        tracker.subscribe(MagicMock(side_effect=RuntimeError("subscriber failed")))
        tracker.set_bairro_change_callback(bairro_calls.append)

        with pytest.raises(RuntimeError):
            tracker.get_brazilian_standard_address(make_payload(**CENTRO))
        with pytest.raises(RuntimeError):
            tracker.get_brazilian_standard_address(make_payload(**BELA_VISTA))

        assert len(bairro_calls) == 1
        assert tracker.cache.size() == 2
