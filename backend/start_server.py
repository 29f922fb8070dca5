#!/usr/bin/env python3
"""Start the catalog manager API with uvicorn."""

import os

import uvicorn

if __name__ == '__main__':
    uvicorn.run(
        'catalog_manager.main:app',
        host=os.environ.get('HOST', '127.0.0.1'),
        port=int(os.environ.get('PORT', '8000')),
        log_level=os.environ.get('LOG_LEVEL', 'info').lower(),
    )
