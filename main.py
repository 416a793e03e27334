#!/usr/bin/env python3
"""
Safety Patrol Report - command line

- template: write a blank report JSON to fill in
- validate: show which wizard steps are complete
- alerts:   show the derived safety alerts in print order
- generate: produce the WhatsApp message through Gemini/OpenAI
- remind:   run the 2-hour report reminder loop
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from patrol_report.alerts import derive_alerts
from patrol_report.composer import ReportComposer, build_payload
from patrol_report.config import Settings
from patrol_report.export import copy_to_clipboard, export_payload_json, export_report_text, whatsapp_share_url
from patrol_report.llm_generation import LLMProvider, create_generator
from patrol_report.reminder import ConsoleNotifier, ReminderMonitor, ReminderStore
from patrol_report.report_data import ReportData
from patrol_report.validation import STEP_TITLES, TOTAL_STEPS, is_step_complete, missing_requirements


def load_report(path: str) -> ReportData:
    report_path = Path(path)
    if not report_path.exists():
        print(f"Error: File not found: {report_path}", file=sys.stderr)
        sys.exit(1)
    try:
        return ReportData.model_validate(json.loads(report_path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError) as e:
        print(f"Error: Invalid report file {report_path}:\n{e}", file=sys.stderr)
        sys.exit(1)


def cmd_template(args) -> int:
    output_json = json.dumps(ReportData().to_payload(), indent=2)
    if args.output:
        Path(args.output).write_text(output_json, encoding="utf-8")
        print(f"Blank report saved to: {args.output}")
    else:
        print(output_json)
    return 0


def cmd_validate(args) -> int:
    data = load_report(args.report)
    all_ok = True
    for step in range(1, TOTAL_STEPS + 1):
        ok = is_step_complete(data, step)
        all_ok = all_ok and ok
        print(f"  Step {step} ({STEP_TITLES[step]}): {'OK' if ok else 'INCOMPLETE'}")
        for label in missing_requirements(data, step):
            print(f"      - missing: {label}")
    return 0 if all_ok else 2


def cmd_alerts(args) -> int:
    data = load_report(args.report)
    alerts = derive_alerts(data)
    if not alerts:
        print("No alerts.")
    for alert in alerts:
        print(alert)
    return 0


def cmd_generate(args) -> int:
    data = load_report(args.report)
    settings = Settings.from_env()

    incomplete = [s for s in range(1, TOTAL_STEPS + 1) if not is_step_complete(data, s)]
    if incomplete:
        print(f"Error: Report incomplete at step(s): {', '.join(map(str, incomplete))}. "
              "Run 'validate' for details.", file=sys.stderr)
        return 2

    provider = LLMProvider(args.llm or settings.provider)
    generator = create_generator(provider, settings)
    store = None if args.no_record else ReminderStore(settings.state_file)
    composer = ReportComposer(generator, store=store)

    if args.payload_output:
        export_payload_json(build_payload(data), args.payload_output)
        print(f"Payload saved to: {args.payload_output}")

    print(f"Generating report with {provider.value}...")
    outcome = asyncio.run(composer.generate(data))
    if not outcome.ok:
        print(f"Error: {outcome.error}", file=sys.stderr)
        return 1

    if args.output:
        export_report_text(outcome.text, args.output)
        print(f"\nReport saved to: {args.output}")
    else:
        print("\n" + "=" * 80)
        print(outcome.text)
        print("=" * 80)

    print(f"\nShare on WhatsApp: {whatsapp_share_url(outcome.text)}")

    if args.copy:
        if copy_to_clipboard(outcome.text):
            print("Report copied to clipboard!")
        else:
            print("Could not copy the report to the clipboard.", file=sys.stderr)
    return 0


def cmd_remind(args) -> int:
    settings = Settings.from_env()
    monitor = ReminderMonitor(
        ReminderStore(settings.state_file),
        ConsoleNotifier(),
        interval=args.interval or settings.reminder_interval,
    )
    print(f"[Reminder] Checking every {monitor.interval}s (state: {settings.state_file})")
    try:
        asyncio.run(monitor.run(iterations=args.iterations))
    except KeyboardInterrupt:
        print("\n[Reminder] Stopped")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Safety Patrol Report - validate patrol data, derive alerts and generate the WhatsApp report"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("template", help="Write a blank report JSON")
    p.add_argument('--output', type=str, help='Output JSON file path (default: stdout)')
    p.set_defaults(func=cmd_template)

    p = sub.add_parser("validate", help="Check each wizard step of a report JSON")
    p.add_argument('report', type=str, help='Path to report JSON')
    p.set_defaults(func=cmd_validate)

    p = sub.add_parser("alerts", help="Print the derived safety alerts")
    p.add_argument('report', type=str, help='Path to report JSON')
    p.set_defaults(func=cmd_alerts)

    p = sub.add_parser("generate", help="Generate the WhatsApp report text")
    p.add_argument('report', type=str, help='Path to report JSON')
    p.add_argument('--llm', type=str, choices=['gemini', 'openai'], default=None,
                   help='LLM provider (default: PATROL_LLM_PROVIDER or gemini)')
    p.add_argument('--output', type=str, help='Write report text to this file (default: stdout)')
    p.add_argument('--payload-output', type=str, help='Also write the generator payload JSON here')
    p.add_argument('--copy', action='store_true', help='Copy the report text to the clipboard')
    p.add_argument('--no-record', action='store_true',
                   help='Do not update the last-report time used for reminders')
    p.set_defaults(func=cmd_generate)

    p = sub.add_parser("remind", help="Run the report reminder loop")
    p.add_argument('--interval', type=float, default=None, help='Seconds between checks (default: 60)')
    p.add_argument('--iterations', type=int, default=None, help='Stop after this many checks')
    p.set_defaults(func=cmd_remind)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
