"""Command line interface: encode, decode and inspect a pretrained tokenizer."""

import argparse
import logging
import sys

from ._bytes import chars_to_bytes
from ._sanitise import render_bytes, render_text
from .errors import CodeTokError
from .session import TokenizerSession

log = logging.getLogger(__name__)


def _read_text(value: str) -> str:
    # "-" reads the whole of stdin
    if value == "-":
        return sys.stdin.read()
    return value


def _cmd_encode(session: TokenizerSession, args: argparse.Namespace) -> None:
    ids = session.encode(_read_text(args.text))
    print(" ".join(str(i) for i in ids))


def _cmd_decode(session: TokenizerSession, args: argparse.Namespace) -> None:
    print(session.decode(args.ids))


def _cmd_spans(session: TokenizerSession, args: argparse.Namespace) -> None:
    for span in session.encode_with_spans(_read_text(args.text)):
        print(f"{span.start}\t{span.end}\t{span.token_id}\t{render_text(span.text)}")


def _cmd_vocab(session: TokenizerSession, args: argparse.Namespace) -> None:
    decoder = session.tokenizer.vocab.decoder
    for count, tok_id in enumerate(sorted(decoder)):
        if args.limit is not None and count >= args.limit:
            break
        token = decoder[tok_id]
        print(f"[{tok_id}] {render_bytes(chars_to_bytes(token))}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codetok",
        description="Byte-level BPE tokenizer for source code.",
    )
    parser.add_argument(
        "--tokenizer",
        type=str,
        default=None,
        help="Path or URL of tokenizer.json (default: $CODETOK_TOKENIZER or model/tokenizer.json).",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log progress at INFO level."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_encode = sub.add_parser("encode", help="Print token ids for TEXT.")
    p_encode.add_argument("text", help="Text to encode, or '-' to read stdin.")
    p_encode.set_defaults(func=_cmd_encode)

    p_decode = sub.add_parser("decode", help="Print the text for token IDS.")
    p_decode.add_argument("ids", type=int, nargs="*", help="Token ids.")
    p_decode.set_defaults(func=_cmd_decode)

    p_spans = sub.add_parser("spans", help="Print start, end, id and text per token.")
    p_spans.add_argument("text", help="Text to encode, or '-' to read stdin.")
    p_spans.set_defaults(func=_cmd_spans)

    p_vocab = sub.add_parser("vocab", help="Print vocabulary entries ordered by id.")
    p_vocab.add_argument(
        "--limit", type=int, default=None, help="Print at most this many entries."
    )
    p_vocab.set_defaults(func=_cmd_vocab)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    session = TokenizerSession(args.tokenizer)
    try:
        session.load()
        args.func(session, args)
    except CodeTokError as e:
        log.debug("command failed", exc_info=True)
        print(f"codetok: error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
