"""
Main entry point for I Ching coin casting.

Cast a six-line figure with three coins and read it through Google Gemini.
"""

from modules.iching.cli.main import build_parser, main


def run() -> None:
    args = build_parser().parse_args()
    main(
        question=args.question,
        seed=args.seed,
        auto=args.auto,
        interpret=not args.no_interpret,
        save_image=args.save_image,
        save_json=args.save_json,
    )


if __name__ == "__main__":
    run()
