#!/usr/bin/env python3
"""
Rank Pools - 인덱서 풀 레코드로 APR 랭킹 테이블 생성

Usage:
    # JSON 파일의 풀을 APR 순으로 정렬
    python -m pool_apr.scripts.rank_pools --pools pools.json --network ethereum

    # denylist 적용, 상위 20개만 CSV로 저장
    python -m pool_apr.scripts.rank_pools --pools pools.json --denylist denylist.yaml \\
        --top 20 --csv ranked.csv

JSON 형식은 풀 레코드 리스트, {"pools": [...]} 또는 The Graph 응답
{"data": {"pools": [...]}} 중 하나입니다.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import pandas as pd

from pool_apr.config import load_denylist, settings
from pool_apr.data.types import PoolSnapshot, ProcessedPool
from pool_apr.math.tick_math import get_tick_spacing_for_fee, round_tick_to_spacing
from pool_apr.ranking import SORT_FIELDS, rank_pools


def load_pool_records(path: str) -> List[Dict[str, Any]]:
    """JSON 파일에서 풀 레코드 로드"""
    with open(path, "r") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("data", data)
        data = data.get("pools", [])

    if not isinstance(data, list):
        raise ValueError(f"풀 레코드 리스트가 아닙니다: {path}")
    return data


def build_table(ranked: List[ProcessedPool]) -> pd.DataFrame:
    """랭킹 결과 → DataFrame (현재 틱을 유효 틱 간격으로 맞춘 값 포함)"""
    rows = []
    for pool in ranked:
        row = pool.to_row()
        try:
            spacing = get_tick_spacing_for_fee(pool.fee_tier)
            row["usable_tick"] = round_tick_to_spacing(pool.tick, spacing)
        except ValueError:
            row["usable_tick"] = None
        rows.append(row)

    df = pd.DataFrame(rows)
    if not df.empty:
        df.index = range(1, len(df) + 1)
    return df


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Rank concentrated-liquidity pools by benchmark APR")
    parser.add_argument("--pools", type=str, required=True, help="Pool records JSON file")
    parser.add_argument("--network", type=str, default="ethereum", help="Network name (denylist key)")
    parser.add_argument("--denylist", type=str, default=settings.DENYLIST_PATH, help="Denylist YAML file")
    parser.add_argument("--deposit", type=float, default=settings.DEPOSIT_USD, help="Benchmark deposit (USD)")
    parser.add_argument("--min-volume", type=float, default=settings.MIN_VOLUME_USD, help="Minimum volume (USD)")
    parser.add_argument("--window", type=int, default=settings.VOLATILITY_WINDOW, help="Volatility window (days)")
    parser.add_argument("--sort", choices=SORT_FIELDS, default="apr", help="Sort field")
    parser.add_argument("--ascending", action="store_true", help="Sort ascending")
    parser.add_argument("--top", type=int, default=0, help="Show top N pools (0=all)")
    parser.add_argument("--csv", type=str, help="Write the table to CSV instead of stdout")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        records = load_pool_records(args.pools)
    except (OSError, ValueError) as e:
        print(f"❌ 풀 레코드를 읽을 수 없습니다: {e}")
        return 1

    pools = []
    for record in records:
        try:
            pools.append(PoolSnapshot.from_dict(record))
        except (KeyError, TypeError, ValueError) as e:
            print(f"⚠️  잘못된 풀 레코드 건너뜀: {e}")

    denylist = load_denylist(args.denylist) if args.denylist else {}

    ranked = rank_pools(
        pools,
        args.network,
        denylist=denylist,
        min_volume_usd=args.min_volume,
        deposit_usd=args.deposit,
        volatility_window=args.window,
        sort_field=args.sort,
        descending=not args.ascending,
    )
    if args.top > 0:
        ranked = ranked[:args.top]

    df = build_table(ranked)

    if args.csv:
        df.to_csv(args.csv, index_label="rank")
        print(f"✓ {len(df)}개 풀 저장: {args.csv}")
    else:
        print(f"\n{args.network.upper()} - 예치금 ${args.deposit:,.0f} 기준 {len(df)}개 풀")
        print(df.to_string() if not df.empty else "(랭킹 대상 풀 없음)")

    return 0


if __name__ == "__main__":
    sys.exit(main())
