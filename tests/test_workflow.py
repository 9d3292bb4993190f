"""Tests for workflow records and their persistence."""

import json

import pytest
from solders.pubkey import Pubkey

from gorb_amm import MissingKeyError, WorkflowRecord, WorkflowStore


class TestWorkflowRecord:
    def test_extend_leaves_parent_untouched(self):
        pool = Pubkey.new_unique()
        root = WorkflowRecord.start({"payer": Pubkey.new_unique()})

        child = root.extend("init_pool", {"pool": pool, "pool_bump": 254}, "sig1")

        assert "pool" not in root
        assert child.resolve("pool") == pool
        assert child.resolve_int("pool_bump") == 254
        assert child.parent is root
        assert child.signature == "sig1"

    def test_fields_are_read_only(self):
        record = WorkflowRecord.start({"amount": 1})
        with pytest.raises(TypeError):
            record.fields["amount"] = 2

    def test_later_steps_override(self):
        record = WorkflowRecord.start({"lp_balance": 10}).extend("add", {"lp_balance": 25})

        assert record.resolve_int("lp_balance") == 25
        assert record.parent.resolve_int("lp_balance") == 10
        assert record.added == {"lp_balance": 25}

    def test_missing_key(self):
        record = WorkflowRecord.start()

        with pytest.raises(MissingKeyError) as exc_info:
            record.resolve("pool")

        assert exc_info.value.key == "pool"
        assert exc_info.value.step == "start"

    def test_missing_int_key(self):
        with pytest.raises(MissingKeyError):
            WorkflowRecord.start().resolve_int("lp_balance")

    def test_history(self):
        record = (
            WorkflowRecord.start()
            .extend("init_pool", {"a": 1})
            .extend("add_liquidity", {"b": 2})
            .extend("swap", {"c": 3})
        )

        assert [r.step for r in record.history()] == [
            "start",
            "init_pool",
            "add_liquidity",
            "swap",
        ]

    def test_addresses_stored_as_base58(self):
        pool = Pubkey.new_unique()
        record = WorkflowRecord.start({"pool": pool})

        assert record.get("pool") == str(pool)

    def test_rejects_unsupported_values(self):
        with pytest.raises(TypeError):
            WorkflowRecord.start({"ratio": 1.5})
        with pytest.raises(TypeError):
            WorkflowRecord.start({"flag": True})

    def test_rejects_reserved_key(self):
        with pytest.raises(ValueError):
            WorkflowRecord.start().extend("bad", {"steps": 1})


class TestWorkflowStore:
    def test_round_trip(self, tmp_path):
        store = WorkflowStore(tmp_path / "pool.json")
        record = (
            WorkflowRecord.start({"payer": Pubkey.new_unique()})
            .extend("init_pool", {"pool": Pubkey.new_unique(), "pool_bump": 255}, "sig1")
            .extend("add_liquidity", {"lp_balance": 17_320_508_075}, "sig2")
        )

        store.save(record)
        loaded = store.load()

        assert loaded == record
        assert [r.step for r in loaded.history()] == [r.step for r in record.history()]
        assert loaded.parent.signature == "sig1"

    def test_flat_json_shape(self, tmp_path):
        path = tmp_path / "pool.json"
        pool = Pubkey.new_unique()
        record = WorkflowRecord.start().extend("init_pool", {"pool": pool, "pool_bump": 7})

        WorkflowStore(path).save(record)
        data = json.loads(path.read_text())

        assert data["pool"] == str(pool)
        assert data["pool_bump"] == 7
        assert [step["step"] for step in data["steps"]] == ["start", "init_pool"]
        assert data["steps"][1]["fields"] == {"pool": str(pool), "pool_bump": 7}

    def test_save_replaces_previous(self, tmp_path):
        store = WorkflowStore(tmp_path / "pool.json")
        first = WorkflowRecord.start({"x": 1})

        store.save(first)
        store.save(first.extend("next", {"x": 2}))

        assert store.load().resolve_int("x") == 2
        assert not (tmp_path / "pool.json.tmp").exists()

    def test_missing_history_rejected(self, tmp_path):
        path = tmp_path / "pool.json"
        path.write_text(json.dumps({"pool": str(Pubkey.new_unique())}))

        with pytest.raises(ValueError):
            WorkflowStore(path).load()
