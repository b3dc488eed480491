#!/usr/bin/env python3
"""
청산 포지션 ROI 저널
증권사 명세서 CSV를 가져오거나 직접 입력한 포지션의 수익률을 터미널에 보여줍니다.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from rich.console import Console

from roi_journal.errors import StatementError, StoreError
from roi_journal.portfolio import Portfolio
from roi_journal.portfolio_store import DEFAULT_DATA_FILE, PortfolioStore, seed_positions
from roi_journal.report_generator import (
    help_text,
    portfolio_header,
    position_detail,
    positions_table,
    summary_panel,
)
from roi_journal.trade_form import TradeForm

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config" / "config.yaml"

logger = logging.getLogger(__name__)


# 설정 파일 로드
def load_config(config_path: Optional[Path] = None) -> dict:
    """YAML 설정 로드

    경로를 명시했는데 파일이 없으면 FileNotFoundError, 기본 경로가 없으면 빈 설정.
    최상위나 logging 항목이 매핑이 아니면 ValueError.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not config_path.exists():
            return {}
    if not config_path.exists():
        raise FileNotFoundError(f"설정 파일을 찾을 수 없습니다: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"설정 파일 최상위는 매핑이어야 합니다: {config_path}")
    if not isinstance(config.get('logging') or {}, dict):
        raise ValueError(f"logging 설정은 매핑이어야 합니다: {config_path}")
    return config


class RoiJournalApp:
    """CLI 명령 처리 - 포트폴리오/저장소/리포트 조율"""

    def __init__(self, config: dict, console: Optional[Console] = None):
        self.config = config
        self.console = console or Console()

        # 데이터 파일 경로 (환경변수 우선)
        data_file = os.getenv('ROI_JOURNAL_DATA_FILE') or config.get('data_file', DEFAULT_DATA_FILE)
        self.store = PortfolioStore(data_file)
        seed = seed_positions() if config.get('seed_when_empty', False) else None
        self.portfolio = Portfolio.from_store(self.store, seed=seed)

    def cmd_list(self, args) -> int:
        self.portfolio.filter_text = (args.filter or "").strip()
        self.console.print(portfolio_header(self.portfolio.records))
        self.console.print(positions_table(self.portfolio))
        return 0

    def cmd_show(self, args) -> int:
        index = self._resolve_position(args.position)
        self.console.print(position_detail(self.portfolio[index], index))
        return 0

    def cmd_summary(self, args) -> int:
        self.console.print(summary_panel(self.portfolio))
        return 0

    def cmd_add(self, args) -> int:
        form = self._form_from_args(args, TradeForm())
        record = form.build_record()
        index = self.portfolio.add(record)
        self.console.print(f"Added position #{index + 1} ({record.ticker})", style="green", markup=False)
        return 0

    def cmd_edit(self, args) -> int:
        index = self._resolve_position(args.position)
        form = self._form_from_args(args, TradeForm.from_record(self.portfolio[index]))
        record = form.build_record()
        self.portfolio.replace(index, record)
        self.console.print(f"Updated position #{index + 1} ({record.ticker})", style="green", markup=False)
        return 0

    def cmd_delete(self, args) -> int:
        index = self._resolve_position(args.position)
        removed = self.portfolio.delete(index)
        self.console.print(f"Deleted position #{index + 1} ({removed.ticker})", style="green", markup=False)
        return 0

    def cmd_import(self, args) -> int:
        path = args.path.strip()
        if not path:
            raise StatementError("Path cannot be empty")
        count = self.portfolio.import_statement(path, dry_run=args.dry_run)
        prefix = "[DRY-RUN] Would import" if args.dry_run else "Imported"
        self.console.print(f"{prefix} {count} positions", style="green", markup=False)
        return 0

    def cmd_help(self, args) -> int:
        self.console.print(help_text())
        return 0

    def _resolve_position(self, position: int) -> int:
        """1-based 포지션 번호 → 인덱스"""
        index = position - 1
        if not 0 <= index < len(self.portfolio):
            raise IndexError(f"No position #{position} (have {len(self.portfolio)})")
        return index

    @staticmethod
    def _form_from_args(args, form: TradeForm) -> TradeForm:
        """지정된 옵션만 폼 필드에 덮어씀"""
        return form.fill([args.ticker, args.cost, args.qty, args.sale, args.bought, args.sold])


def _add_position_options(parser: argparse.ArgumentParser):
    parser.add_argument('--ticker', help='티커 (예: AAPL)')
    parser.add_argument('--cost', help='매수 단가 (예: 112.40)')
    parser.add_argument('--qty', help='수량 (예: 50)')
    parser.add_argument('--sale', help='매도 단가 (예: 128.70)')
    parser.add_argument('--bought', help='매수일 YYYY-MM-DD 또는 MM/DD/YYYY')
    parser.add_argument('--sold', help='매도일 YYYY-MM-DD 또는 MM/DD/YYYY')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='청산 포지션의 수익률을 관리합니다.')
    parser.add_argument('--config', type=Path, default=None,
                        help='설정 파일 경로 (기본값: config/config.yaml)')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='로그 레벨을 설정합니다 (기본값: 설정 파일 또는 INFO)')

    sub = parser.add_subparsers(dest='command')

    p_list = sub.add_parser('list', help='포지션 목록')
    p_list.add_argument('--filter', default='', help='티커 필터 (부분 일치)')
    p_list.set_defaults(func=RoiJournalApp.cmd_list)

    p_show = sub.add_parser('show', help='포지션 상세')
    p_show.add_argument('position', type=int)
    p_show.set_defaults(func=RoiJournalApp.cmd_show)

    p_summary = sub.add_parser('summary', help='포트폴리오 요약')
    p_summary.set_defaults(func=RoiJournalApp.cmd_summary)

    p_add = sub.add_parser('add', help='포지션 추가')
    _add_position_options(p_add)
    p_add.set_defaults(func=RoiJournalApp.cmd_add)

    p_edit = sub.add_parser('edit', help='포지션 수정 (지정한 값만 변경)')
    p_edit.add_argument('position', type=int)
    _add_position_options(p_edit)
    p_edit.set_defaults(func=RoiJournalApp.cmd_edit)

    p_delete = sub.add_parser('delete', help='포지션 삭제')
    p_delete.add_argument('position', type=int)
    p_delete.set_defaults(func=RoiJournalApp.cmd_delete)

    p_import = sub.add_parser('import', help='증권사 명세서 CSV 가져오기')
    p_import.add_argument('path')
    p_import.add_argument('--dry-run', action='store_true',
                          help='저장하지 않고 파싱 결과만 확인합니다.')
    p_import.set_defaults(func=RoiJournalApp.cmd_import)

    p_help = sub.add_parser('help', help='명령 도움말')
    p_help.set_defaults(func=RoiJournalApp.cmd_help)

    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """메인 함수"""
    args = build_parser().parse_args(argv)
    config = load_config(args.config)

    # 로거 설정
    logging_config = config.get('logging') or {}
    level_name = str(args.log_level or logging_config.get('level') or 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger().setLevel(getattr(logging, level_name, logging.INFO))

    console = console or Console()
    func = getattr(args, 'func', RoiJournalApp.cmd_list)
    if not hasattr(args, 'filter'):
        args.filter = ''

    try:
        app = RoiJournalApp(config, console=console)
        return func(app, args)
    except (StatementError, StoreError, IndexError) as e:
        logger.debug(f"명령 실패: {e}")
        console.print(f"error: {e}", style="red", markup=False)
        return 1


if __name__ == "__main__":
    sys.exit(main())
