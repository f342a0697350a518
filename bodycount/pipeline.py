"""
Body Count Pipeline
===================
Single entry point for counting the body words of a manuscript.
Orchestrates: Segmenter -> BodyClassifier -> StructuralFilter -> CitationExtractor -> Result

Two inputs converge on the same engine:
- plain text: segmented here, traits computed heuristically
- typed blocks: supplied by a document reader, traits read off the tags
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .types import TextBlock, BodyParseResult
from .blocks import BlockSegmenter, SegmenterConfig, BODY_START_KEYWORDS, BODY_END_KEYWORDS
from .providers import BlockTraits, PlainTextTraits, TypedBlockTraits
from .structure import BodyClassifier, StructuralFilter, NOT_IN_BODY, DONE, KEEP
from .citations import CitationTally, extract_citations
from .words import count_words


@dataclass
class PipelineConfig:
    """Complete pipeline configuration"""
    # Keyword vocabularies
    start_keywords: Tuple[str, ...] = BODY_START_KEYWORDS
    end_keywords: Tuple[str, ...] = BODY_END_KEYWORDS

    # Heading predicate
    heading_max_words: int = 12
    title_case_ratio: float = 0.6

    # Body start fallback
    enable_fallback: bool = True
    fallback_min_words: int = 20  # strictly more than this

    # Structural filter
    caption_max_words: int = 40
    table_min_score: int = 2
    table_line_ratio: float = 0.6

    # Debug
    debug: bool = False

    @classmethod
    def default(cls) -> 'PipelineConfig':
        """Heading start with length-based fallback"""
        return cls()

    @classmethod
    def headings_only(cls) -> 'PipelineConfig':
        """Only a recognized start heading opens the body"""
        return cls(enable_fallback=False)

    def segmenter_config(self) -> SegmenterConfig:
        return SegmenterConfig(
            heading_max_words=self.heading_max_words,
            title_case_ratio=self.title_case_ratio,
            start_keywords=self.start_keywords,
            end_keywords=self.end_keywords,
        )

    def plain_traits(self) -> PlainTextTraits:
        return PlainTextTraits(
            heading_max_words=self.heading_max_words,
            title_case_ratio=self.title_case_ratio,
            table_min_score=self.table_min_score,
            table_line_ratio=self.table_line_ratio,
            start_keywords=self.start_keywords,
            end_keywords=self.end_keywords,
        )


@dataclass
class DebugBundle:
    """Debug information from pipeline run"""
    source: str = ""
    blocks_total: int = 0
    blocks_empty: int = 0
    blocks_before_body: int = 0
    blocks_after_end: int = 0
    blocks_kept: int = 0

    tables_excluded: int = 0
    captions_dropped: int = 0
    labels_dropped: int = 0

    parenthetical_candidates: int = 0
    bracket_candidates: int = 0

    started_by: str = "none"
    start_heading: Optional[str] = None
    end_heading: Optional[str] = None

    skipped_samples: List[str] = field(default_factory=list)

    def summary(self) -> str:
        """Generate summary string"""
        lines = [
            "=" * 60,
            "BODY COUNTER DEBUG SUMMARY",
            "=" * 60,
            f"Source: {self.source}",
            f"Blocks: {self.blocks_total} (empty {self.blocks_empty})",
            f"Started By: {self.started_by} ({self.start_heading or '-'})",
            f"End Heading: {self.end_heading or '-'}",
            "",
            f"Before Body: {self.blocks_before_body}",
            f"After End: {self.blocks_after_end}",
            f"Kept: {self.blocks_kept}",
            "",
            f"Tables Excluded: {self.tables_excluded}",
            f"Captions Dropped: {self.captions_dropped}",
            f"Labels Dropped: {self.labels_dropped}",
            "",
            f"Parenthetical Candidates: {self.parenthetical_candidates}",
            f"Bracket Candidates: {self.bracket_candidates}",
        ]
        if self.skipped_samples:
            lines.append("")
            lines.append("Skipped Before Body (first 5):")
            for sample in self.skipped_samples[:5]:
                lines.append(f"  {sample}")
        lines.append("=" * 60)
        return "\n".join(lines)


class BodyCountPipeline:
    """
    Main body counting pipeline.

    Usage:
        pipeline = BodyCountPipeline()
        result, debug = pipeline.run_text(raw_text)
        result, debug = pipeline.run_blocks(blocks)
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig.default()
        self.segmenter = BlockSegmenter(self.config.segmenter_config())

    def run_text(self, raw_text: str) -> Tuple[BodyParseResult, DebugBundle]:
        """
        Run pipeline on flat text.

        Args:
            raw_text: Manuscript text, paragraphs separated by blank lines

        Returns:
            Tuple of (result, debug_bundle)
        """
        blocks = self.segmenter.split(raw_text)
        if self.config.debug:
            print(f"[BODY] Segmented {len(blocks)} blocks from {len(raw_text or '')} chars")
        return self._run(blocks, self.config.plain_traits(), source="text")

    def run_blocks(self, blocks: Sequence[TextBlock]) -> Tuple[BodyParseResult, DebugBundle]:
        """
        Run pipeline on pre-typed blocks from a document reader.

        Args:
            blocks: Ordered TextBlock list with kind / style_name set

        Returns:
            Tuple of (result, debug_bundle)
        """
        return self._run(list(blocks), TypedBlockTraits(), source="blocks")

    def _run(
        self,
        blocks: List[TextBlock],
        traits: BlockTraits,
        source: str,
    ) -> Tuple[BodyParseResult, DebugBundle]:
        cfg = self.config
        debug = DebugBundle(source=source, blocks_total=len(blocks))

        classifier = BodyClassifier(
            start_keywords=cfg.start_keywords,
            end_keywords=cfg.end_keywords,
            fallback_min_words=cfg.fallback_min_words,
            title_case_ratio=cfg.title_case_ratio,
            enable_fallback=cfg.enable_fallback,
        )
        structural = StructuralFilter(caption_max_words=cfg.caption_max_words)
        tally = CitationTally()

        kept_blocks: List[str] = []
        total_words = 0

        for index, block in enumerate(blocks):
            view = traits.describe(block)
            if view is None:
                debug.blocks_empty += 1
                continue

            # 1. Body boundaries
            state = classifier.step(view)
            if state == DONE:
                debug.blocks_after_end = len(blocks) - index
                break
            if state == NOT_IN_BODY:
                debug.blocks_before_body += 1
                if len(debug.skipped_samples) < 5:
                    debug.skipped_samples.append(view.text[:60])
                continue

            # 2. Structural filter
            if structural.check(view) != KEEP:
                continue

            # 3. Citations
            extraction = extract_citations(view.text)
            tally.add_all(extraction.citations)
            debug.parenthetical_candidates += extraction.parenthetical_count
            debug.bracket_candidates += extraction.bracket_count

            if not extraction.cleaned_text:
                continue

            total_words += count_words(extraction.cleaned_text)
            kept_blocks.append(extraction.cleaned_text)

        debug.blocks_kept = len(kept_blocks)
        debug.tables_excluded = structural.stats.tables_excluded
        debug.captions_dropped = structural.stats.captions_dropped
        debug.labels_dropped = structural.stats.labels_dropped
        debug.started_by = classifier.started_by
        debug.start_heading = classifier.start_heading
        debug.end_heading = classifier.end_heading

        if cfg.debug:
            print(f"[BODY] Started by: {classifier.started_by} ({classifier.start_heading})")
            print(f"[BODY] End heading: {classifier.end_heading}")
            print(f"[BODY] Kept {len(kept_blocks)} blocks, {total_words} words")
            print(f"[BODY] Citations: {len(tally)} unique, {tally.total_occurrences} occurrences")

        # 4. Assemble result
        citation_words = tally.words_removed
        result = BodyParseResult(
            word_count=total_words,
            raw_word_count=total_words + citation_words,
            body_text="\n\n".join(kept_blocks),
            started_by=classifier.started_by,
            start_heading=classifier.start_heading,
            end_heading=classifier.end_heading,
            citation_words_removed=citation_words,
            structural_blocks_excluded=structural.stats.tables_excluded,
            citations=tally.sorted_entries(),
            citation_count=tally.total_occurrences,
        )
        return result, debug


def count_from_text(raw_text: str, config: Optional[PipelineConfig] = None) -> BodyParseResult:
    """
    Count body words of plain manuscript text.
    """
    result, _ = BodyCountPipeline(config).run_text(raw_text)
    return result


def count_from_blocks(blocks: Sequence[TextBlock], config: Optional[PipelineConfig] = None) -> BodyParseResult:
    """
    Count body words of pre-typed blocks.
    """
    result, _ = BodyCountPipeline(config).run_blocks(blocks)
    return result
