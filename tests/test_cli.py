# ==============================================
# Tests for CLI
# ==============================================

import pytest

from ewaste.cli import main
from ewaste.config import reset_config


def run(ctx, capsys, *argv):
    code = main(list(argv), context=ctx)
    return code, capsys.readouterr().out


class TestAccounts:
    def test_register_and_whoami(self, ctx, capsys):
        code, out = run(ctx, capsys, "register", "Alice", "alice@x.com", "pw")
        assert code == 0
        assert "Registered" in out
        code, out = run(ctx, capsys, "whoami")
        assert code == 0
        assert "alice@x.com" in out

    def test_duplicate_register_fails(self, ctx, capsys):
        run(ctx, capsys, "register", "Alice", "alice@x.com", "pw")
        code, out = run(ctx, capsys, "register", "Alice2", "alice@x.com", "pw2")
        assert code == 1
        assert "failed" in out

    def test_bad_login(self, ctx, capsys):
        code, out = run(ctx, capsys, "login", "admin@example.com", "nope")
        assert code == 1

    def test_logout(self, ctx, capsys):
        run(ctx, capsys, "login", "admin@example.com", "password")
        assert run(ctx, capsys, "logout")[0] == 0
        code, out = run(ctx, capsys, "whoami")
        assert code == 1
        assert "Not logged in" in out

    def test_unknown_command_is_usage_error(self, ctx):
        with pytest.raises(SystemExit) as exc:
            main(["teleport"], context=ctx)
        assert exc.value.code == 2


class TestClassifications:
    def test_classify_requires_login(self, ctx, capsys):
        code, out = run(ctx, capsys, "classify", "Router", "Networking",
                        "--hazard", "Lead", "--confidence", "80")
        assert code == 1
        assert "Log in first" in out

    def test_classify_and_history(self, ctx, capsys):
        run(ctx, capsys, "login", "admin@example.com", "password")
        code, out = run(ctx, capsys, "classify", "Router", "Networking",
                        "--hazard", "Lead", "--hazard", "Cadmium", "--confidence", "80")
        assert code == 0
        assert "hazard critical" in out

        code, out = run(ctx, capsys, "history")
        assert "4 classification(s)" in out
        assert out.index("Router") < out.index("Laptop Battery")

    def test_out_of_range_confidence(self, ctx, capsys):
        run(ctx, capsys, "login", "admin@example.com", "password")
        code, out = run(ctx, capsys, "classify", "Router", "Networking",
                        "--hazard", "Lead", "--confidence", "150")
        assert code == 1
        assert "confidence" in out

    def test_history_all_needs_admin(self, ctx, capsys):
        run(ctx, capsys, "register", "Alice", "alice@x.com", "pw")
        code, out = run(ctx, capsys, "history", "--all")
        assert code == 1


class TestMarketplace:
    def test_sell_list_unlist(self, ctx, capsys):
        run(ctx, capsys, "register", "Alice", "alice@x.com", "pw")
        code, out = run(ctx, capsys, "sell", "Old Router", "15", "--condition", "good",
                        "--category", "Accessories", "--image", "r.jpg")
        assert code == 0
        listing_id = ctx.marketplace.get_by_user(ctx.session.current.id)[0].id

        code, out = run(ctx, capsys, "listings", "--sort", "price-low")
        assert "3 listing(s)" in out
        assert out.index("Old Router") < out.index("Gaming Laptop")

        assert run(ctx, capsys, "unlist", listing_id)[0] == 0
        code, out = run(ctx, capsys, "unlist", listing_id)
        assert code == 0
        assert "not found" in out

    def test_unlist_other_sellers_item_denied(self, ctx, capsys):
        run(ctx, capsys, "register", "Alice", "alice@x.com", "pw")
        code, out = run(ctx, capsys, "unlist", "1")
        assert code == 1
        assert ctx.marketplace.get("1") is not None


class TestAnalytics:
    def test_stats_for_seed_user(self, ctx, capsys):
        run(ctx, capsys, "login", "admin@example.com", "password")
        code, out = run(ctx, capsys, "stats")
        assert code == 0
        assert "Total classifications: 3" in out
        assert "Lead: 2" in out

    def test_admin_stats_denied_for_users(self, ctx, capsys):
        run(ctx, capsys, "register", "Alice", "alice@x.com", "pw")
        assert run(ctx, capsys, "stats", "--admin")[0] == 1

    def test_impact(self, ctx, capsys):
        run(ctx, capsys, "login", "admin@example.com", "password")
        code, out = run(ctx, capsys, "impact")
        assert "Items classified: 3" in out
        assert "[✓] First Steps" in out


class TestCalculatorAndReset:
    def test_calculator_flow(self, ctx, capsys):
        run(ctx, capsys, "login", "admin@example.com", "password")
        assert run(ctx, capsys, "calculator", "set", "car_miles", "100")[0] == 0
        code, out = run(ctx, capsys, "calculator", "compute")
        assert "transport 40.4" in out

    def test_calculator_bad_field(self, ctx, capsys):
        run(ctx, capsys, "login", "admin@example.com", "password")
        assert run(ctx, capsys, "calculator", "set", "rockets", "3")[0] == 1

    def test_reset_needs_confirm(self, ctx, capsys, kv):
        run(ctx, capsys, "login", "admin@example.com", "password")
        assert run(ctx, capsys, "reset")[0] == 1
        assert kv.keys()
        assert run(ctx, capsys, "reset", "--confirm")[0] == 0
        assert kv.keys() == []


class TestStartupFailures:
    @pytest.fixture
    def bad_env(self, monkeypatch):
        reset_config()
        yield monkeypatch
        reset_config()

    def test_bad_backend_reported(self, bad_env, capsys):
        bad_env.setenv("STORAGE_BACKEND", "sqlite")
        code = main(["whoami"])
        assert code == 1
        assert capsys.readouterr().out.startswith("✗ ")

    def test_bad_port_reported(self, bad_env, capsys):
        bad_env.setenv("STORAGE_BACKEND", "mongo")
        bad_env.setenv("MONGO_PORT", "not-a-port")
        assert main(["whoami"]) == 1
        assert "MONGO_PORT" in capsys.readouterr().out
