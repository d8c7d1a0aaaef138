# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to the stores.
#   The session persists between invocations, so
#   "login" in one command applies to the next.
#
# COMMANDS:
# ---------
# 1. Accounts:
#    python -m ewaste.cli register "Alice" alice@x.com pw
#    python -m ewaste.cli login alice@x.com pw
#    python -m ewaste.cli whoami
#    python -m ewaste.cli logout
#
# 2. Classifications:
#    python -m ewaste.cli classify Router Networking --hazard Lead --confidence 80
#    python -m ewaste.cli history --sort confidence
#    python -m ewaste.cli history --all          (administrators only)
#
# 3. Marketplace:
#    python -m ewaste.cli sell "Old router" 15 --condition good --category Accessories --image x.jpg
#    python -m ewaste.cli listings --sort price-low
#    python -m ewaste.cli unlist <id>
#
# 4. Analytics:
#    python -m ewaste.cli stats [--admin]
#    python -m ewaste.cli impact
#
# 5. Carbon calculator:
#    python -m ewaste.cli calculator set car_miles 1200
#    python -m ewaste.cli calculator compute
#
# 6. Reset everything (for testing):
#    python -m ewaste.cli reset --confirm
#
# EXIT STATUS:
# ------------
#   0 success, 1 failed operation (including bad configuration or an
#   unreachable MongoDB), 2 usage error (argparse)
#
# ==============================================

import argparse
import sys
from dataclasses import fields
from typing import List, Optional

from pymongo.errors import PyMongoError

from ewaste.analysis import (
    hazard_level,
    search_history,
    search_listings,
    dashboard_stats,
    admin_stats,
    category_breakdown,
    hazardous_element_counts,
    impact_summary,
    achievements,
)
from ewaste.analysis.search import HISTORY_SORTS, LISTING_SORTS
from ewaste.calculator import CarbonInputs
from ewaste.context import AppContext
from ewaste.domain import Condition
from ewaste.errors import EwasteError, PermissionDenied


def _print_record(record) -> None:
    level = hazard_level(record.hazardous_elements).value
    print(f"  [{record.id}] {record.object_name} ({record.category}) "
          f"{record.confidence:.1f}% | hazard {level}: {', '.join(record.hazardous_elements)}")


def _print_listing(item) -> None:
    print(f"  [{item.id}] {item.title} | ${item.price:.2f} "
          f"({item.condition.value}, {item.category}) by {item.seller_name}")


# --- accounts ---

def cmd_register(ctx: AppContext, args) -> int:
    if not ctx.session.register(args.name, args.email, args.password, role=args.role):
        print("✗ Registration failed")
        return 1
    print(f"✓ Registered and logged in as {ctx.session.current.name} (id {ctx.session.current.id})")
    return 0


def cmd_login(ctx: AppContext, args) -> int:
    if not ctx.session.login(args.email, args.password):
        print("✗ Invalid email or password")
        return 1
    print(f"✓ Logged in as {ctx.session.current.name} (id {ctx.session.current.id})")
    return 0


def cmd_logout(ctx: AppContext, args) -> int:
    ctx.session.logout()
    print("✓ Logged out")
    return 0


def cmd_whoami(ctx: AppContext, args) -> int:
    user = ctx.session.current
    if user is None:
        print("Not logged in")
        return 1
    print(f"{user.name} <{user.email}> id={user.id} role={user.role.value}")
    return 0


# --- classifications ---

def cmd_classify(ctx: AppContext, args) -> int:
    record = ctx.classify(
        object_name=args.object_name,
        category=args.category,
        hazardous_elements=args.hazard,
        confidence=args.confidence,
        image_url=args.image,
    )
    print(f"✓ Stored classification {record.id}")
    _print_record(record)
    return 0


def cmd_history(ctx: AppContext, args) -> int:
    user = ctx.require_user()
    if args.all:
        if not user.is_admin:
            raise PermissionDenied("Only administrators can list every classification")
        records = ctx.classifications.get_all()
    else:
        records = ctx.classifications.get_by_user(user.id)

    matches = search_history(records, term=args.search, category=args.category, sort_by=args.sort)
    print(f"{len(matches)} classification(s)")
    for record in matches:
        _print_record(record)
    return 0


# --- marketplace ---

def cmd_sell(ctx: AppContext, args) -> int:
    listing = ctx.post_listing(
        title=args.title,
        price=args.price,
        condition=args.condition,
        category=args.category,
        images=args.image,
        description=args.description,
    )
    print(f"✓ Listed {listing.id}")
    _print_listing(listing)
    return 0


def cmd_listings(ctx: AppContext, args) -> int:
    if args.mine:
        items = ctx.marketplace.get_by_user(ctx.require_user().id)
    else:
        items = ctx.marketplace.get_all()

    matches = search_listings(items, term=args.search, category=args.category,
                              condition=args.condition, sort_by=args.sort)
    print(f"{len(matches)} listing(s)")
    for item in matches:
        _print_listing(item)
    return 0


def cmd_unlist(ctx: AppContext, args) -> int:
    if not ctx.remove_listing(args.listing_id):
        print(f"Listing {args.listing_id} not found")
        return 0
    print(f"✓ Removed listing {args.listing_id}")
    return 0


# --- analytics ---

def cmd_stats(ctx: AppContext, args) -> int:
    user = ctx.require_user()
    if args.admin:
        if not user.is_admin:
            raise PermissionDenied("Only administrators can view system statistics")
        records = ctx.classifications.get_all()
        stats = admin_stats(records, ctx.marketplace.get_all())
        print(f"Total classifications: {stats.total_classifications}")
        print(f"Active users:          {stats.active_users}")
        print(f"Hazardous items:       {stats.hazardous_items}")
        print(f"Marketplace listings:  {stats.marketplace_listings}")
        top = hazardous_element_counts(records, top=10)
    else:
        records = ctx.classifications.get_by_user(user.id)
        stats = dashboard_stats(records)
        print(f"Total classifications: {stats.total_classifications}")
        print(f"Most common category:  {stats.most_common_category or 'N/A'} "
              f"({stats.most_common_category_count} items)")
        print(f"Hazardous items:       {stats.hazardous_items}")
        print(f"Last 30 days:          {stats.last_30_days}")
        top = hazardous_element_counts(records)

    print("By category:")
    for category, count in sorted(category_breakdown(records).items()):
        print(f"  {category}: {count}")
    print("Hazardous elements:")
    for element, count in top:
        print(f"  {element}: {count}")
    return 0


def cmd_impact(ctx: AppContext, args) -> int:
    user = ctx.require_user()
    summary = impact_summary(ctx.classifications.get_by_user(user.id))
    print(f"Items classified: {summary.total_items}")
    print(f"CO₂ saved:        {summary.co2_saved_kg:.1f} kg")
    print(f"Energy saved:     {summary.energy_saved_kwh} kWh")
    print(f"Water saved:      {summary.water_saved_litres} liters")
    for achievement in achievements(summary):
        mark = "✓" if achievement.earned else " "
        print(f"  [{mark}] {achievement.title}: {achievement.description}")
    return 0


# --- calculator ---

def cmd_calculator(ctx: AppContext, args) -> int:
    user = ctx.require_user()
    if args.action == "set":
        if args.field is None or args.value is None:
            print("✗ calculator set needs FIELD and VALUE")
            return 1
        state = ctx.calculator.update(user.id, **{args.field: args.value})
    elif args.action == "compute":
        state = ctx.calculator.calculate(user.id)
    elif args.action == "reset":
        state = ctx.calculator.reset(user.id)
    else:
        state = ctx.calculator.load(user.id)

    for f in fields(CarbonInputs):
        value = getattr(state.inputs, f.name)
        print(f"  {f.name}: {'' if value is None else value}")
    if state.result:
        print(f"Total: {state.result.total} kg CO₂/year "
              f"(transport {state.result.transport}, home {state.result.home}, "
              f"lifestyle {state.result.lifestyle})")
    return 0


def cmd_reset(ctx: AppContext, args) -> int:
    if not args.confirm:
        print("✗ Refusing to reset without --confirm")
        return 1
    ctx.kv.clear()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ewaste", description="E-waste hub command line")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("register", help="create an account and log in")
    p.add_argument("name")
    p.add_argument("email")
    p.add_argument("password")
    p.add_argument("--role", default="user", choices=["user", "admin"])
    p.set_defaults(handler=cmd_register)

    p = sub.add_parser("login", help="log in")
    p.add_argument("email")
    p.add_argument("password")
    p.set_defaults(handler=cmd_login)

    sub.add_parser("logout", help="log out").set_defaults(handler=cmd_logout)
    sub.add_parser("whoami", help="show the current identity").set_defaults(handler=cmd_whoami)

    p = sub.add_parser("classify", help="store a classification result")
    p.add_argument("object_name")
    p.add_argument("category")
    p.add_argument("--hazard", action="append", required=True, help="hazardous element (repeatable)")
    p.add_argument("--confidence", type=float, required=True)
    p.add_argument("--image", default="")
    p.set_defaults(handler=cmd_classify)

    p = sub.add_parser("history", help="list classifications")
    p.add_argument("--all", action="store_true", help="every user's records (admin)")
    p.add_argument("--search", default="")
    p.add_argument("--category", default="all")
    p.add_argument("--sort", default="date", choices=HISTORY_SORTS)
    p.set_defaults(handler=cmd_history)

    p = sub.add_parser("sell", help="post a marketplace listing")
    p.add_argument("title")
    p.add_argument("price", type=float)
    p.add_argument("--condition", required=True, choices=[c.value for c in Condition])
    p.add_argument("--category", required=True)
    p.add_argument("--image", action="append", required=True, help="image URL (repeatable, up to 5)")
    p.add_argument("--description", default="")
    p.set_defaults(handler=cmd_sell)

    p = sub.add_parser("listings", help="browse marketplace listings")
    p.add_argument("--mine", action="store_true")
    p.add_argument("--search", default="")
    p.add_argument("--category", default="all")
    p.add_argument("--condition", default="all", choices=["all"] + [c.value for c in Condition])
    p.add_argument("--sort", default="newest", choices=LISTING_SORTS)
    p.set_defaults(handler=cmd_listings)

    p = sub.add_parser("unlist", help="remove a marketplace listing")
    p.add_argument("listing_id")
    p.set_defaults(handler=cmd_unlist)

    p = sub.add_parser("stats", help="dashboard statistics")
    p.add_argument("--admin", action="store_true", help="system-wide statistics (admin)")
    p.set_defaults(handler=cmd_stats)

    sub.add_parser("impact", help="environmental impact and achievements").set_defaults(handler=cmd_impact)

    p = sub.add_parser("calculator", help="carbon footprint calculator")
    p.add_argument("action", choices=["show", "set", "compute", "reset"])
    p.add_argument("field", nargs="?", help="one of: " + ", ".join(f.name for f in fields(CarbonInputs)))
    p.add_argument("value", nargs="?")
    p.set_defaults(handler=cmd_calculator)

    p = sub.add_parser("reset", help="delete all stored state")
    p.add_argument("--confirm", action="store_true")
    p.set_defaults(handler=cmd_reset)

    return parser


def main(argv: Optional[List[str]] = None, context: Optional[AppContext] = None) -> int:
    args = build_parser().parse_args(argv)

    ctx = context
    try:
        if ctx is None:
            ctx = AppContext()
        return args.handler(ctx, args)
    except (EwasteError, PyMongoError) as e:
        print(f"✗ {e}")
        return 1
    finally:
        if context is None and ctx is not None:
            ctx.close()


if __name__ == "__main__":
    sys.exit(main())
