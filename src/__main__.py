#!/usr/bin/env python3
"""
folio - Blog and portfolio content processor

Renders a directory of markdown posts to HTML fragments and computes the
related posts shown under each article.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Philosophy:
    - Text-first: posts are plain markdown files with YAML front matter
    - Fragments, not pages: output is the HTML the site injects into its
      own layout, exactly what the editor's live preview shows
    - Deterministic: the same posts and the same clock give the same output

Usage:
    folio inputdir/ outputdir/

    Every post in inputdir/ is rendered to outputdir/<slug>.html and the
    related posts of every post are written to outputdir/related.json.

Examples:
    # Published posts only
    folio posts/ build/

    # Include drafts, five related posts each, verbose
    folio posts/ build/ --includeDrafts --maxRelated 5 -vv
"""

import sys
import json
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import AppSettings, appsettings
from .lib import ContentStore, StoreError, Renderer, Recommender, __version__, LOG, state_connectToLogger
from .models import ProgramState, RecommendationTarget, pipeline


DISPLAY_TITLE = r"""
    __       _ _
   / _| ___ | (_) ___
  | |_ / _ \| | |/ _ \
  |  _| (_) | | | (_) |
  |_|  \___/|_|_|\___/

  Blog and portfolio content processor
"""

RELATED_FILE = "related.json"

# Define CLI arguments
parser = ArgumentParser(
    description="folio - render markdown posts and compute related posts",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--postGlob",
    default=None,
    type=str,
    help="Glob selecting post files inside inputdir (defaults to FOLIO_POST_GLOB or *.md)",
)

parser.add_argument(
    "--maxRelated",
    default=None,
    type=int,
    help="Number of related posts kept per post (defaults to FOLIO_MAX_RELATED or 3)",
)

parser.add_argument(
    "--includeDrafts",
    default=False,
    action="store_true",
    help="Also render and recommend unpublished posts",
)

parser.add_argument(
    "--wrapLists",
    default=False,
    action="store_true",
    help="Wrap runs of list items in <ul>/<ol>",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def settings_make(state: ProgramState) -> AppSettings:
    """Layer the CLI options over the environment-derived settings"""
    overrides = {}
    if state.postGlob:
        overrides["post_glob"] = state.postGlob
    if state.maxRelated is not None:
        overrides["max_related"] = state.maxRelated
    if state.wrapLists:
        overrides["wrap_lists"] = True
    return appsettings.model_copy(update=overrides)


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the input directory and create the output directory.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with envOK set

    Exits:
        1 if the input directory does not exist
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    if state.maxRelated is not None and state.maxRelated < 0:
        print(f"Error: --maxRelated must not be negative: {state.maxRelated}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Input directory: {state.inputdir}", level=2)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def posts_load(inputstate: ProgramState) -> ProgramState:
    """
    Load the posts from the content store.

    Args:
        inputstate: Program state with a validated inputdir

    Returns:
        ProgramState with added field:
            - posts: posts newest first (published only unless includeDrafts)

    Exits:
        1 if the store cannot be read
    """

    state = inputstate.copy()

    LOG("Loading posts...", level=1)

    try:
        store = ContentStore(state.inputdir, settings=settings_make(state))
        store.posts_load()
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    state.posts = store.posts_query(published=None if state.includeDrafts else True)
    LOG(f"Selected {len(state.posts)} posts", level=2)
    return state


def posts_render(inputstate: ProgramState) -> ProgramState:
    """
    Render every selected post to an HTML fragment.

    Returns:
        ProgramState with added field:
            - renderedPosts: slug -> HTML fragment
    """

    state = inputstate.copy()

    LOG("Rendering posts...", level=1)

    renderer = Renderer(settings_make(state))
    state.renderedPosts = {post.slug: renderer.render(post.body) for post in state.posts or []}
    LOG(f"Rendered {len(state.renderedPosts)} posts", level=2)
    return state


def related_compute(inputstate: ProgramState) -> ProgramState:
    """
    Compute related posts for every selected post.

    The pool is the selected posts themselves, so drafts are only
    recommended when they are included.

    Returns:
        ProgramState with added field:
            - relatedPosts: slug -> ordered related slugs
    """

    state = inputstate.copy()

    LOG("Computing related posts...", level=1)

    recommender = Recommender(settings_make(state))
    pool = [post.candidate_make() for post in state.posts or []]
    state.relatedPosts = {}
    for candidate in pool:
        related = recommender.recommend(RecommendationTarget.item_from(candidate), pool)
        state.relatedPosts[candidate.identifier] = [item.identifier for item in related]
        LOG(f"Related: {state.relatedPosts[candidate.identifier]}", level=3, post=candidate.identifier)

    return state


def results_write(inputstate: ProgramState) -> ProgramState:
    """
    Write fragments and related.json to the output directory.

    Returns:
        ProgramState with added field:
            - writeResult: dict with output_dir, fragment_count, related_file

    Exits:
        1 if writing fails
    """

    state = inputstate.copy()

    LOG("Writing results...", level=1)

    try:
        for slug, fragment in (state.renderedPosts or {}).items():
            target = state.outputdir / f"{slug}.html"
            target.write_text(fragment, encoding="utf-8")
            LOG(f"Wrote {target}", level=3, post=slug)

        related_file = state.outputdir / RELATED_FILE
        related_file.write_text(json.dumps(state.relatedPosts or {}, indent=2), encoding="utf-8")
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        sys.exit(1)

    state.writeResult = {
        "output_dir": str(state.outputdir),
        "fragment_count": len(state.renderedPosts or {}),
        "related_file": str(related_file),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display a summary of the run.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if writeResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.writeResult:
        print("Error: Nothing was written", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Posts processed", level=1)
    LOG(f"  Output: {state.writeResult['output_dir']}", level=1)
    LOG(f"  Fragments: {state.writeResult['fragment_count']}", level=1)
    LOG(f"  Related: {state.writeResult['related_file']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="folio - blog and portfolio content processor",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render posts and compute related posts.

    Orchestrates the full pipeline:
        1. env_check: Validate paths
        2. posts_load: Read posts from the content store
        3. posts_render: Render posts to HTML fragments
        4. related_compute: Rank related posts per post
        5. results_write: Write fragments and related.json
        6. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, posts_load, posts_render, related_compute, results_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
