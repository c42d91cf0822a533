"""
Core processing modules for the earnings paste analyzer.

This package contains:
- aggregation: Hourly bucketing and PPV / non-PPV totals
- classifier: Keyword classification of descriptions
- config: Application configuration and settings
- datetime_parser: Date/time extraction from export fragments
- exceptions: Custom exception classes
- exporters: Excel export functionality
- formatting: Currency and hour labels
- insights: Category breakdown and top spenders
- logger: Logging configuration
- normalize: Money cell normalization
- parsing: Whole-paste parsing into logical rows
- row_parser: Single row to transaction conversion
- schema: Pydantic models for transactions and reports
"""
