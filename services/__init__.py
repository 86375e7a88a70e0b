"""
服務層

這個 package 包含資料表的 CRUD 與格式轉換，不負責顯示狀態轉換：
- settings_service：設定值
- category_service：分類
- performer_service：選手（含匯入/匯出）
- csv_service：CSV 格式
"""
