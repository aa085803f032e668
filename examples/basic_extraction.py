"""
Basic example of reconstructing the images embedded in a PDF.
"""

import logging
from pathlib import Path
from pdf_image_reconstruct import PDFImageExtractor, ExtractionConfig, InputError


def main():
    logging.basicConfig(level=logging.INFO)

    # Path to your PDF file
    pdf_path = Path("example.pdf")

    # Configure extraction
    config = ExtractionConfig(
        output_dir="extracted_images",
        strategies=["structural", "rendered"],
        max_workers=4,
        async_timeout=0.5,
    )

    # Create extractor and process PDF
    extractor = PDFImageExtractor(config)

    try:
        result = extractor.extract_all_images(pdf_path, save=True)

        # Print results
        print("=" * 60)
        print("PDF IMAGE EXTRACTION COMPLETE")
        print("=" * 60)
        print(f"PDF: {result.pdf_path}")
        print(f"Total pages: {result.total_pages}")
        print(f"Images decoded: {result.decoded_count}")
        print(f"Placeholders: {result.placeholder_count}")
        print(f"Processing time: {result.extraction_time:.2f} seconds")

        for record in result.records:
            if record.is_placeholder:
                print(f"  ! {record.source_name} (page {record.source_page}): {record.reason}")

        if result.saved_files:
            print("\nSaved files:")
            for file in result.saved_files[:5]:  # Show first 5
                print(f"  - {file}")
            if len(result.saved_files) > 5:
                print(f"  ... and {len(result.saved_files) - 5} more")

    except FileNotFoundError:
        print(f"Error: PDF file not found at {pdf_path}")
    except InputError as e:
        print(f"Error: {e}")


if __name__ == "__main__":
    main()
