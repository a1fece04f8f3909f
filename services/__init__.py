"""
服務層

純計算邏輯，不存取資料庫，不涉及狀態轉換：
- NamingService: 參與者顯示名稱
- MarkdownService: MarkdownV2 跳脫與格式
- CommandService: 指令與內容解析
- RenderService: Session 狀態 -> 顯示內容
"""
