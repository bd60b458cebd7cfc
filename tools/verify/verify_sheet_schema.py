import os, sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lib.py.contact_store import HEADER
from lib.py.sheets import a1_range, google_credentials, sheets_service

def main():
    sheet_id=os.environ.get("SHEET_ID","").strip()
    tab=os.environ.get("SHEET_TAB","list").strip() or "list"
    if not sheet_id:
        print('...[ERROR] [verify] step=contacts_schema ok=false reason="missing SHEET_ID"'); sys.exit(2)
    creds=google_credentials(["https://www.googleapis.com/auth/spreadsheets.readonly"])
    svc=sheets_service(creds)
    vals=svc.spreadsheets().values().get(spreadsheetId=sheet_id, range=a1_range(tab,"1:1")).execute().get("values",[[]])[0]
    ok = [v.strip() for v in vals] == list(HEADER)
    print(f'...[INFO] [verify] step=contacts_schema ok={str(ok).lower()} cols={len(vals)} expected={len(HEADER)}')
    sys.exit(0 if ok else 1)

if __name__=="__main__":
    main()
