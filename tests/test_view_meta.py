from recolour.reporting.view_meta import (
    SORT_OPTIONS,
    build_approved_meta,
    build_approved_meta_for_partner,
    build_partner_ticket_list_meta,
    build_queue_meta,
)


def test_sort_options_cover_every_key_and_direction():
    assert len(SORT_OPTIONS) == 8
    assert SORT_OPTIONS[0].label == "Created Date Ascending"
    assert SORT_OPTIONS[0].value == "createdAt:asc"
    assert SORT_OPTIONS[-1].value == "status:desc"


def test_queue_meta_lists_partner_filter():
    meta = build_queue_meta(["Studio Alpha", "Studio Beta"])

    assert [item.key for item in meta.filters] == ["status", "priority", "partner"]
    assert [option.value for option in meta.filters[2].options] == ["Studio Alpha", "Studio Beta"]
    assert len(meta.filters[0].options) == 6
    assert meta.default_sort == "createdAt:desc"
    assert "actions" in [column.key for column in meta.columns]


def test_partner_meta_hides_pending_and_approved():
    meta = build_partner_ticket_list_meta()

    statuses = [option.value for option in meta.filters[0].options]
    assert statuses == ["Sent", "Received", "In Progress", "Completed"]
    assert "partner" not in [column.key for column in meta.columns]


def test_approved_meta_has_columns_only():
    assert build_approved_meta().filters == []
    assert [column.key for column in build_approved_meta_for_partner().columns] == ["id", "approvedDate"]
