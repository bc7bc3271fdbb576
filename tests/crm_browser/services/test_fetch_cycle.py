from crm_browser.services.fetch_cycle import FetchCycle, stamped_cycle, stamped_payload


def test_latest_cycle_accepts_its_result():
    current = FetchCycle().begin()
    fetched = current.stamp({"data": [], "error": None})
    assert current.accepts(stamped_cycle(fetched))
    assert stamped_payload(fetched) == {"data": [], "error": None}


def test_newer_cycle_makes_older_result_stale():
    old = FetchCycle().begin()
    fetched = old.stamp({"data": []})
    new = old.begin()
    assert not new.accepts(stamped_cycle(fetched))
    assert new.accepts(stamped_cycle(new.stamp({"data": []})))


def test_release_drops_pending_results():
    current = FetchCycle().begin()
    fetched = current.stamp({"data": []})
    assert not current.release().accepts(stamped_cycle(fetched))


def test_leaving_and_returning_does_not_revive_old_results():
    first = FetchCycle().begin()
    stale = first.stamp({"data": []})
    returned = first.release().begin()
    assert returned.cycle == 2
    assert not returned.accepts(stamped_cycle(stale))


def test_cycles_live_in_each_clients_store():
    # two browser tabs hold their own store data; one leaving the view
    # has no effect on the other's pending load
    tab_a = FetchCycle().begin()
    tab_b = FetchCycle().begin()
    fetched_a = tab_a.stamp({"data": []})
    tab_b = tab_b.release()
    assert tab_a.accepts(stamped_cycle(fetched_a))
    assert not tab_b.live


def test_store_round_trip_and_bad_data():
    current = FetchCycle(cycle=3, live=True)
    assert FetchCycle.from_dict(current.to_dict()) == current
    assert FetchCycle.from_dict(None) == FetchCycle()
    assert FetchCycle.from_dict({"cycle": "3"}) == FetchCycle()
    assert stamped_cycle(None) is None
    assert stamped_payload("junk") is None
