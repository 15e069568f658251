# scripts/print_rankings.py
# Usage: python -m scripts.print_rankings [--user USER_ID] [--cuisine NAME ...] [--top N]
import argparse
import asyncio
from services.ranking_service import format_rating, get_global_rankings, get_user_rankings, star_array

def _stars(rating: float) -> str:
    return "".join("*" if s else "." for s in star_array(rating))

async def main(args):
    if args.user:
        rankings = await get_user_rankings(args.user, excluded_cuisines=args.exclude)
        for pos, r in enumerate(rankings, start=1):
            print(f"{pos:>3}. {r.restaurant_name:<30} {format_rating(r.average_rating):>4} {_stars(r.average_rating)}  "
                  f"(service {r.service_rating}, price {r.price_rating}, menu {r.menu_rating})")
    else:
        rankings = await get_global_rankings(cuisines=args.cuisine, limit=args.top)
        for pos, r in enumerate(rankings, start=1):
            print(f"{pos:>3}. {r.restaurant_name:<30} {format_rating(r.average_rating):>4} {_stars(r.average_rating)}  "
                  f"[{r.cuisine or '-'}] {r.review_count} review(s)")
    if not rankings:
        print("No rankings yet")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print the restaurant leaderboard")
    parser.add_argument("--user", help="print this user's personal ranking instead")
    parser.add_argument("--cuisine", action="append", help="only include this cuisine (global ranking)")
    parser.add_argument("--exclude", action="append", help="exclude this cuisine (user ranking)")
    parser.add_argument("--top", type=int, default=None)
    asyncio.run(main(parser.parse_args()))
